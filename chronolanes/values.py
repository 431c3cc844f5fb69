from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple, Union


@dataclass(frozen=True)
class ListValue:
    """An ordered list of raw values as stored on a record property."""

    items: Tuple[Any, ...]

    def __len__(self) -> int:
        return len(self.items)

    def get(self, index: int) -> Optional["Value"]:
        if 0 <= index < len(self.items):
            return coerce_value(self.items[index])
        return None

    def is_truthy(self) -> bool:
        return len(self.items) > 0


@dataclass(frozen=True)
class StringValue:
    text: str

    def is_truthy(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True)
class NumberValue:
    number: float

    def is_truthy(self) -> bool:
        if isinstance(self.number, float):
            return self.number != 0 and not math.isnan(self.number)
        return self.number != 0

    def as_float(self) -> Optional[float]:
        """Return the number as a finite float, or ``None`` when it has no such form."""

        try:
            number = float(self.number)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None


Value = Union[ListValue, StringValue, NumberValue]


class Record(Protocol):
    """Anything the timeline can read dates from.

    The timeline never mutates a record; it only looks up properties and uses
    ``identity`` as the key for lanes and conflict flags.
    """

    @property
    def identity(self) -> str:
        ...

    def get_value(self, property_id: str) -> Optional[Value]:
        ...


def coerce_value(raw: Any) -> Optional[Value]:
    """Wrap plain Python data into a value variant.

    ``None``, booleans and unsupported types are treated as absent.
    """

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (ListValue, StringValue, NumberValue)):
        return raw
    if isinstance(raw, (list, tuple)):
        return ListValue(tuple(raw))
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, (int, float)):
        return NumberValue(raw)
    return None


__all__ = [
    "ListValue",
    "NumberValue",
    "Record",
    "StringValue",
    "Value",
    "coerce_value",
]
