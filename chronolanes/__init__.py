"""Conflict-aware, lane-packed timeline layouts for date records."""

from .axis import AxisTick, compute_ticks
from .calendar_arithmetic import (
    calendar_from_absolute_day,
    calendar_to_absolute_day,
    from_absolute_day,
    from_absolute_day_with_months,
    to_absolute_day,
    to_absolute_day_with_months,
)
from .date_parser import parse_year_month_day
from .layout import (
    TimelineLayout,
    Track,
    assign_tracks,
    compute_layout,
    detect_index_conflicts,
    sort_by_index_or_date,
)
from .models import TimelineConfig, TimelineRecord
from .timeline_builder import NormalizedDateRange, TimelineItem, build_timeline_items
from .values import ListValue, NumberValue, Record, StringValue, Value, coerce_value

__all__ = [
    "AxisTick",
    "ListValue",
    "NormalizedDateRange",
    "NumberValue",
    "Record",
    "StringValue",
    "TimelineConfig",
    "TimelineItem",
    "TimelineLayout",
    "TimelineRecord",
    "Track",
    "Value",
    "assign_tracks",
    "build_timeline_items",
    "calendar_from_absolute_day",
    "calendar_to_absolute_day",
    "coerce_value",
    "compute_layout",
    "compute_ticks",
    "detect_index_conflicts",
    "from_absolute_day",
    "from_absolute_day_with_months",
    "parse_year_month_day",
    "sort_by_index_or_date",
    "to_absolute_day",
    "to_absolute_day_with_months",
]
