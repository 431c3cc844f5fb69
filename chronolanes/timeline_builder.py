from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .calendar_arithmetic import calendar_to_absolute_day
from .date_parser import parse_component, parse_year_month_day
from .values import ListValue, NumberValue, Record, StringValue, Value, coerce_value

logger = logging.getLogger("chronolanes.builder")

INDEX_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True)
class NormalizedDateRange:
    start_day: int
    end_day: int


@dataclass(frozen=True)
class TimelineItem:
    """A record placed on the absolute day axis."""

    record: Record
    range: NormalizedDateRange
    index_value: Optional[float] = None
    months: Optional[Tuple[int, ...]] = None

    @property
    def identity(self) -> str:
        return self.record.identity


def _read_value(record: Record, property_id: str) -> Optional[Value]:
    try:
        return coerce_value(record.get_value(property_id))
    except Exception:
        logger.warning(
            "Failed to read property '%s' from record '%s'; treating it as absent.",
            property_id,
            getattr(record, "identity", "?"),
            exc_info=True,
        )
        return None


def resolve_calendar(record: Record, calendar_prop: Optional[str]) -> Optional[Tuple[int, ...]]:
    """Read custom month lengths from a record, ignoring non-positive or non-numeric entries."""

    if not calendar_prop:
        return None
    value = _read_value(record, calendar_prop)
    if not isinstance(value, ListValue) or len(value) == 0:
        return None
    months: List[int] = []
    for position in range(len(value)):
        length = parse_component(value.get(position))
        if length is not None and length > 0:
            months.append(length)
    return tuple(months) if months else None


def extract_date_range(
    record: Record,
    start_prop: Optional[str],
    end_prop: Optional[str],
    months: Optional[Tuple[int, ...]] = None,
) -> Optional[NormalizedDateRange]:
    if not start_prop:
        return None
    start = parse_year_month_day(_read_value(record, start_prop))
    if start is None:
        return None
    start_day = calendar_to_absolute_day(*start, months)

    end_day = start_day
    if end_prop:
        end = parse_year_month_day(_read_value(record, end_prop))
        if end is not None:
            end_day = max(start_day, calendar_to_absolute_day(*end, months))
    return NormalizedDateRange(start_day=start_day, end_day=end_day)


def resolve_index(record: Record, index_prop: Optional[str]) -> Optional[float]:
    if not index_prop:
        return None
    value = _read_value(record, index_prop)
    if value is None or not value.is_truthy():
        return None
    if isinstance(value, StringValue):
        text = value.text.strip()
        if not INDEX_PATTERN.match(text):
            return None
        value = NumberValue(float(text))
    if isinstance(value, NumberValue):
        return value.as_float()
    return None


def build_timeline_items(
    records: Iterable[Record],
    start_prop: Optional[str],
    end_prop: Optional[str] = None,
    index_prop: Optional[str] = None,
    calendar_prop: Optional[str] = None,
) -> List[TimelineItem]:
    """Turn records into timeline items, keeping input order.

    Records whose start date cannot be parsed are left out.
    """

    items: List[TimelineItem] = []
    dropped = 0
    for record in records:
        months = resolve_calendar(record, calendar_prop)
        date_range = extract_date_range(record, start_prop, end_prop, months)
        if date_range is None:
            dropped += 1
            continue
        items.append(
            TimelineItem(
                record=record,
                range=date_range,
                index_value=resolve_index(record, index_prop),
                months=months,
            )
        )

    if dropped:
        logger.debug("Dropped %d record(s) without a parsable start date.", dropped)
    return items


__all__ = [
    "NormalizedDateRange",
    "TimelineItem",
    "build_timeline_items",
    "extract_date_range",
    "resolve_calendar",
    "resolve_index",
]
