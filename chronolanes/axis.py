from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .calendar_arithmetic import (
    calendar_from_absolute_day,
    first_day_of_month,
    first_day_of_year,
    format_date_parts,
    next_month,
)

DEFAULT_MIN_LABEL_PX = 40


@dataclass(frozen=True)
class AxisTick:
    day: int
    label: str


def _granularity(pixels_per_day: float, min_label_px: float) -> str:
    if pixels_per_day >= min_label_px:
        return "day"
    if pixels_per_day * 7 >= min_label_px:
        return "week"
    if pixels_per_day * 30 >= min_label_px:
        return "month"
    return "year"


def compute_ticks(
    min_day: int,
    max_day: int,
    pixels_per_day: float,
    min_label_px: float = DEFAULT_MIN_LABEL_PX,
    months: Optional[Sequence[int]] = None,
    limit: Optional[int] = None,
) -> List[AxisTick]:
    """Pick axis ticks between ``min_day`` and ``max_day`` inclusive.

    The finest of day, week, month or year spacing that leaves at least
    ``min_label_px`` pixels between labels is used.
    """

    ticks: List[AxisTick] = []
    if min_day > max_day or pixels_per_day <= 0:
        return ticks

    def full() -> bool:
        return limit is not None and len(ticks) >= limit

    granularity = _granularity(pixels_per_day, min_label_px)

    if granularity in ("day", "week"):
        step = 1 if granularity == "day" else 7
        day = min_day if step == 1 else min_day - min_day % 7
        if day < min_day:
            day += step
        while day <= max_day and not full():
            ticks.append(AxisTick(day, format_date_parts(calendar_from_absolute_day(day, months))))
            day += step
        return ticks

    if granularity == "month":
        year, month, _ = calendar_from_absolute_day(min_day, months)
        start = first_day_of_month(year, month, months)
        if start < min_day:
            year, month = next_month(year, month, months)
            start = first_day_of_month(year, month, months)
        while start <= max_day and not full():
            ticks.append(AxisTick(start, f"{year}-{month:02d}"))
            year, month = next_month(year, month, months)
            start = first_day_of_month(year, month, months)
        return ticks

    year, _, _ = calendar_from_absolute_day(min_day, months)
    start = first_day_of_year(year, months)
    if start < min_day:
        year += 1
        start = first_day_of_year(year, months)
    while start <= max_day and not full():
        ticks.append(AxisTick(start, str(year)))
        year += 1
        start = first_day_of_year(year, months)
    return ticks


__all__ = ["AxisTick", "DEFAULT_MIN_LABEL_PX", "compute_ticks"]
