from __future__ import annotations

import random

from .calendar_arithmetic import (
    calendar_from_absolute_day,
    calendar_to_absolute_day,
    days_in_year,
    from_absolute_day,
    from_absolute_day_with_months,
    gregorian_month_lengths,
    is_leap_year,
    next_month,
    to_absolute_day,
    to_absolute_day_with_months,
)


def test_leap_year_rules():
    assert is_leap_year(2024)
    assert is_leap_year(2000)
    assert is_leap_year(0)
    assert not is_leap_year(1900)
    assert not is_leap_year(2023)
    assert days_in_year(2024) == 366
    assert gregorian_month_lengths(2024)[1] == 29
    assert gregorian_month_lengths(2023)[1] == 28


def test_absolute_day_origin_is_year_zero():
    assert to_absolute_day(0, 1, 1) == 0
    assert to_absolute_day(1, 1, 1) == 366
    assert from_absolute_day(365) == (0, 12, 31)
    assert from_absolute_day(366) == (1, 1, 1)


def test_absolute_day_matches_year_by_year_count():
    expected = sum(days_in_year(year) for year in range(2000))
    assert expected == 730485
    assert to_absolute_day(2000, 1, 1) == expected
    assert to_absolute_day(2000, 3, 1) == expected + 31 + 29


def test_gregorian_round_trip_including_leap_days():
    rng = random.Random(20240229)
    samples = [(2024, 2, 29), (2000, 2, 29), (1900, 2, 28), (0, 1, 1), (1999, 12, 31)]
    for _ in range(300):
        year = rng.randint(0, 3000)
        month = rng.randint(1, 12)
        day = rng.randint(1, gregorian_month_lengths(year)[month - 1])
        samples.append((year, month, day))

    for year, month, day in samples:
        assert from_absolute_day(to_absolute_day(year, month, day)) == (year, month, day)


def test_consecutive_days_are_consecutive_dates():
    start = to_absolute_day(2023, 12, 30)
    assert [from_absolute_day(start + offset) for offset in range(4)] == [
        (2023, 12, 30),
        (2023, 12, 31),
        (2024, 1, 1),
        (2024, 1, 2),
    ]


def test_invalid_day_of_month_rolls_into_next_month():
    assert to_absolute_day(2023, 2, 29) == to_absolute_day(2023, 3, 1)
    assert to_absolute_day(2024, 2, 30) == to_absolute_day(2024, 3, 1)
    assert from_absolute_day(to_absolute_day(2023, 2, 29)) == (2023, 3, 1)


def test_month_past_december_rolls_into_following_year():
    assert to_absolute_day(2024, 13, 1) == to_absolute_day(2025, 1, 1)
    assert to_absolute_day(2024, 25, 1) == to_absolute_day(2026, 1, 1)


def test_month_below_one_counts_no_preceding_months():
    assert to_absolute_day(2024, 0, 15) == to_absolute_day(2024, 1, 15)
    assert to_absolute_day(2024, -3, 1) == to_absolute_day(2024, 1, 1)


def test_negative_days_round_trip():
    assert from_absolute_day(-1) == (-1, 12, 31)
    assert to_absolute_day(-1, 12, 31) == -1
    for year, month, day in [(-1, 1, 1), (-4, 2, 29), (-401, 7, 14)]:
        assert from_absolute_day(to_absolute_day(year, month, day)) == (year, month, day)


def test_custom_calendar_day_counts():
    months = [10, 20]
    assert to_absolute_day_with_months(0, 1, 1, months) == 0
    assert to_absolute_day_with_months(0, 2, 1, months) == 10
    assert to_absolute_day_with_months(1, 1, 1, months) == 30
    assert to_absolute_day_with_months(2, 2, 5, months) == 74
    assert from_absolute_day_with_months(74, months) == (2, 2, 5)


def test_custom_calendar_clamps_day_into_month():
    months = [10, 20]
    assert to_absolute_day_with_months(0, 1, 15, months) == 9
    assert to_absolute_day_with_months(0, 1, 0, months) == 0


def test_custom_calendar_missing_months_default_to_thirty_days():
    months = [10, 20]
    assert to_absolute_day_with_months(0, 3, 1, months) == 30
    assert to_absolute_day_with_months(0, 4, 1, months) == 60
    assert to_absolute_day_with_months(0, 3, 31, months) == 59


def test_custom_calendar_round_trip():
    rng = random.Random(7)
    for _ in range(50):
        months = [rng.randint(1, 40) for _ in range(rng.randint(1, 15))]
        for _ in range(20):
            year = rng.randint(-50, 5000)
            month = rng.randint(1, len(months))
            day = rng.randint(1, months[month - 1])
            absolute = to_absolute_day_with_months(year, month, day, months)
            assert from_absolute_day_with_months(absolute, months) == (year, month, day)


def test_custom_calendar_negative_days():
    assert from_absolute_day_with_months(-1, [10, 20]) == (-1, 2, 20)
    assert to_absolute_day_with_months(-1, 2, 20, [10, 20]) == -1


def test_unusable_month_lengths_fall_back_to_gregorian():
    gregorian = to_absolute_day(2024, 5, 6)
    assert to_absolute_day_with_months(2024, 5, 6, []) == gregorian
    assert to_absolute_day_with_months(2024, 5, 6, [30, 0]) == gregorian
    assert from_absolute_day_with_months(gregorian, []) == (2024, 5, 6)


def test_calendar_dispatch_helpers():
    assert calendar_to_absolute_day(2024, 5, 6) == to_absolute_day(2024, 5, 6)
    assert calendar_to_absolute_day(2, 2, 5, [10, 20]) == 74
    assert calendar_from_absolute_day(74, (10, 20)) == (2, 2, 5)
    assert calendar_from_absolute_day(0) == (0, 1, 1)


def test_next_month_wraps_at_calendar_length():
    assert next_month(2024, 12) == (2025, 1)
    assert next_month(2024, 3) == (2024, 4)
    assert next_month(5, 2, [10, 20]) == (6, 1)
    assert next_month(5, 1, [10, 20]) == (5, 2)
