"""Day-count arithmetic for the Gregorian calendar and custom calendars.

Absolute day 0 is the first day of year 0 in the active calendar. The
Gregorian rules are applied proleptically, so year 0 is a leap year and
negative years extend the same cycle backwards.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

GREGORIAN_MONTH_LENGTHS: Tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
DAYS_PER_400_YEARS = 146_097
DEFAULT_MONTH_LENGTH = 30

DateParts = Tuple[int, int, int]


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def gregorian_month_lengths(year: int) -> Tuple[int, ...]:
    if is_leap_year(year):
        return GREGORIAN_MONTH_LENGTHS[:1] + (29,) + GREGORIAN_MONTH_LENGTHS[2:]
    return GREGORIAN_MONTH_LENGTHS


def _days_before_year(year: int) -> int:
    # Leap years in [0, year); floor division keeps this valid for negative years.
    return 365 * year + (year + 3) // 4 - (year + 99) // 100 + (year + 399) // 400


def to_absolute_day(year: int, month: int, day: int) -> int:
    """Convert a Gregorian date to an absolute day.

    Day-of-month is not validated: ``(2023, 2, 29)`` lands on March 1st.
    Months past December roll into the following years; months below 1 count
    no preceding months.
    """

    month_index = max(0, month - 1)
    if month_index >= 12:
        extra_years, month_index = divmod(month_index, 12)
        year += extra_years
    lengths = gregorian_month_lengths(year)
    return _days_before_year(year) + sum(lengths[:month_index]) + day - 1


def from_absolute_day(absolute_day: int) -> DateParts:
    cycles, remainder = divmod(absolute_day, DAYS_PER_400_YEARS)
    year = cycles * 400
    while remainder >= days_in_year(year):
        remainder -= days_in_year(year)
        year += 1

    lengths = gregorian_month_lengths(year)
    for month, length in enumerate(lengths[:-1], start=1):
        if remainder < length:
            return year, month, remainder + 1
        remainder -= length
    return year, 12, remainder + 1


def usable_months(months: Optional[Sequence[int]]) -> Optional[Tuple[int, ...]]:
    """Return the month lengths as a tuple, or ``None`` when they cannot define a calendar."""

    if not months:
        return None
    if any(length <= 0 for length in months):
        return None
    return tuple(months)


def _month_length(months: Sequence[int], month: int) -> int:
    if 1 <= month <= len(months):
        return months[month - 1]
    return DEFAULT_MONTH_LENGTH


def to_absolute_day_with_months(year: int, month: int, day: int, months: Sequence[int]) -> int:
    """Convert a date in a custom calendar to an absolute day.

    The day is clamped into the month so out-of-range input still lands in the
    intended month. Months missing from ``months`` count as 30 days.
    """

    lengths = usable_months(months)
    if lengths is None:
        return to_absolute_day(year, month, day)

    preceding = max(0, month - 1)
    days = year * sum(lengths) + sum(lengths[:preceding])
    days += DEFAULT_MONTH_LENGTH * max(0, preceding - len(lengths))
    current = _month_length(lengths, month)
    return days + max(1, min(current, day)) - 1


def from_absolute_day_with_months(absolute_day: int, months: Sequence[int]) -> DateParts:
    lengths = usable_months(months)
    if lengths is None:
        return from_absolute_day(absolute_day)

    year, remainder = divmod(absolute_day, sum(lengths))
    for month, length in enumerate(lengths[:-1], start=1):
        if remainder < length:
            return year, month, remainder + 1
        remainder -= length
    return year, len(lengths), min(lengths[-1], remainder + 1)


def calendar_to_absolute_day(
    year: int, month: int, day: int, months: Optional[Sequence[int]] = None
) -> int:
    lengths = usable_months(months)
    if lengths is None:
        return to_absolute_day(year, month, day)
    return to_absolute_day_with_months(year, month, day, lengths)


def calendar_from_absolute_day(absolute_day: int, months: Optional[Sequence[int]] = None) -> DateParts:
    lengths = usable_months(months)
    if lengths is None:
        return from_absolute_day(absolute_day)
    return from_absolute_day_with_months(absolute_day, lengths)


def months_per_year(months: Optional[Sequence[int]] = None) -> int:
    lengths = usable_months(months)
    return len(lengths) if lengths else 12


def first_day_of_month(year: int, month: int, months: Optional[Sequence[int]] = None) -> int:
    return calendar_to_absolute_day(year, month, 1, months)


def first_day_of_year(year: int, months: Optional[Sequence[int]] = None) -> int:
    return first_day_of_month(year, 1, months)


def next_month(year: int, month: int, months: Optional[Sequence[int]] = None) -> Tuple[int, int]:
    if month >= months_per_year(months):
        return year + 1, 1
    return year, month + 1


def format_date_parts(parts: DateParts) -> str:
    year, month, day = parts
    return f"{year}-{month:02d}-{day:02d}"


__all__ = [
    "DEFAULT_MONTH_LENGTH",
    "GREGORIAN_MONTH_LENGTHS",
    "calendar_from_absolute_day",
    "calendar_to_absolute_day",
    "days_in_year",
    "first_day_of_month",
    "first_day_of_year",
    "format_date_parts",
    "from_absolute_day",
    "from_absolute_day_with_months",
    "gregorian_month_lengths",
    "is_leap_year",
    "months_per_year",
    "next_month",
    "to_absolute_day",
    "to_absolute_day_with_months",
    "usable_months",
]
