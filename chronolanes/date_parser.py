from __future__ import annotations

import math
import re
from typing import Any, Optional, Tuple

from .values import ListValue, NumberValue, StringValue, Value, coerce_value

BRACKET_PATTERN = re.compile(r"[\[\](){}]")
SEPARATOR_PATTERN = re.compile(r"[\s,/\-]+")
LEADING_INTEGER_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def parse_component(raw: Any) -> Optional[int]:
    """Parse a single date component from a number or a numeric string.

    Strings are read up to the first non-digit, so ``"12abc"`` gives 12 and
    ``"3.7"`` gives 3. Numbers are truncated towards zero.
    """

    value = coerce_value(raw)
    if isinstance(value, NumberValue):
        number = value.as_float()
        if number is None:
            return None
        return int(number)
    if isinstance(value, StringValue):
        match = LEADING_INTEGER_PATTERN.match(value.text)
        if not match:
            return None
        try:
            return int(match.group(1))
        except ValueError:
            return None
    return None


def _parse_list(value: ListValue) -> Optional[Tuple[int, int, int]]:
    if len(value) < 3:
        return None
    year = parse_component(value.get(0))
    month = parse_component(value.get(1))
    day = parse_component(value.get(2))
    if year is None or month is None or day is None:
        return None
    return year, month, day


def _parse_string(value: StringValue) -> Optional[Tuple[int, int, int]]:
    cleaned = BRACKET_PATTERN.sub("", value.text.strip())
    parts = [part for part in SEPARATOR_PATTERN.split(cleaned) if part]
    if len(parts) < 3:
        return None
    year, month, day = (parse_component(part) for part in parts[:3])
    if year is None or month is None or day is None:
        return None
    return year, month, day


def _parse_packed_number(value: NumberValue) -> Optional[Tuple[int, int, int]]:
    number = value.as_float()
    if number is None:
        return None
    # math.fmod keeps the sign of the dividend
    year = math.floor(number / 10000)
    month = math.floor(math.fmod(number, 10000) / 100)
    day = math.floor(math.fmod(number, 100))
    if not (year and month and day):
        return None
    return year, month, day


def parse_year_month_day(value: Optional[Value]) -> Optional[Tuple[int, int, int]]:
    """Extract ``(year, month, day)`` from a record value.

    Accepted shapes:

    - a list with at least three numeric components ``[2024, 1, 15]``
    - a delimited string ``"2024-01-15"``, ``"(2024, 1, 15)"``, ``"2024/1/15"``
    - a packed number ``20240115``

    Anything else, or any unparsable component, returns ``None``.
    """

    value = coerce_value(value)
    if isinstance(value, ListValue):
        return _parse_list(value)
    if isinstance(value, StringValue):
        return _parse_string(value)
    if isinstance(value, NumberValue):
        return _parse_packed_number(value)
    return None


__all__ = ["parse_component", "parse_year_month_day"]
