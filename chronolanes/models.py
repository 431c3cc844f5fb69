from __future__ import annotations

import math
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .values import Value, coerce_value

MIN_PIXELS_PER_DAY = 0.001
MAX_PIXELS_PER_DAY = 200.0

MonthLength = Annotated[int, Field(gt=0)]


class TimelineRecord(BaseModel):
    """A record as sent by the host: a stable id plus raw property values."""

    id: str = Field(..., min_length=1, description="Stable identity of the record (e.g. a file path)")
    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Property values keyed by property id; lists, strings or numbers",
    )

    @property
    def identity(self) -> str:
        return self.id

    def get_value(self, property_id: str) -> Optional[Value]:
        return coerce_value(self.properties.get(property_id))


class TimelineConfig(BaseModel):
    """Which properties drive the timeline and how the axis is scaled."""

    start_prop: Optional[str] = Field(default=None, description="Property holding the start date")
    end_prop: Optional[str] = Field(default=None, description="Property holding the end date")
    index_prop: Optional[str] = Field(
        default=None,
        description="Numeric property that, when set on any record, overrides chronological order",
    )
    calendar_prop: Optional[str] = Field(
        default=None,
        description="Property holding custom month lengths, e.g. [30, 30, 35]",
    )
    mode: Literal["notes", "events"] = Field(default="notes")
    pixels_per_day: Optional[float] = Field(
        default=None,
        description="Axis scale; clamped into [0.001, 200]",
    )

    @field_validator("start_prop", "end_prop", "index_prop", "calendar_prop", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def _normalise_mode(cls, value: Any) -> str:
        return "events" if value == "events" else "notes"

    @field_validator("pixels_per_day", mode="before")
    @classmethod
    def _clamp_pixels_per_day(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
        if math.isnan(number):
            return None
        return min(MAX_PIXELS_PER_DAY, max(MIN_PIXELS_PER_DAY, number))


class LayoutRequest(BaseModel):
    records: List[TimelineRecord] = Field(default_factory=list)
    config: TimelineConfig = Field(default_factory=TimelineConfig)


class DateParts(BaseModel):
    year: int
    month: int
    day: int


class PlacedItem(BaseModel):
    id: str
    track: int = Field(..., ge=0, description="Lane index, 0 is the leftmost lane")
    start_day: int
    end_day: int
    index_value: Optional[float] = None
    start: DateParts
    end: DateParts
    conflict: bool = Field(
        default=False,
        description="True when this item's display position disagrees with its chronological position",
    )


class AxisLabel(BaseModel):
    day: int
    label: str


class LayoutResponse(BaseModel):
    mode: Literal["notes", "events"]
    tracks: List[List[PlacedItem]]
    order: List[str] = Field(..., description="Record ids in display order")
    conflicts: List[str]
    track_count: int
    min_day: Optional[int] = None
    max_day: Optional[int] = None
    total_days: int
    pixels_per_day: float
    ticks: List[AxisLabel]
    generated_at: datetime


class ToAbsoluteDayRequest(BaseModel):
    year: int = Field(..., ge=-10_000_000, le=10_000_000)
    month: int = Field(..., ge=-1_200, le=1_200)
    day: int = Field(..., ge=-100_000, le=100_000)
    months: Optional[List[MonthLength]] = Field(default=None, max_length=1_000)


class AbsoluteDayResponse(BaseModel):
    day: int


class FromAbsoluteDayRequest(BaseModel):
    day: int = Field(..., ge=-4_000_000_000, le=4_000_000_000)
    months: Optional[List[MonthLength]] = Field(default=None, max_length=1_000)
