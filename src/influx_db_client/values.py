"""Scalar values accepted by the line protocol.

Each variant knows how to render itself in two positions: as a field value
(``to_line``), where the wire format carries type information, and as a tag
value (``to_tag``), where everything is an unquoted string.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .errors import EncodingError
from .serialization import escape_field_string

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class StringValue:
    text: str

    def to_line(self) -> str:
        return f'"{escape_field_string(self.text)}"'

    def to_tag(self) -> str:
        return self.text


@dataclass(frozen=True)
class IntegerValue:
    value: int

    def to_line(self) -> str:
        return f"{self._checked()}i"

    def to_tag(self) -> str:
        return str(self._checked())

    def _checked(self) -> int:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise EncodingError(
                f"IntegerValue needs an int, got {type(self.value).__name__}", context=self
            )
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise EncodingError(f"Integer {self.value} does not fit in 64 bits", context=self)
        return self.value


@dataclass(frozen=True)
class FloatValue:
    value: float

    def to_line(self) -> str:
        return self._render()

    def to_tag(self) -> str:
        return self._render()

    def _render(self) -> str:
        number = float(self.value)
        if not math.isfinite(number):
            raise EncodingError(f"Float {number!r} cannot be written", context=self)
        # repr() is the shortest text that parses back to the same double
        return repr(number)


@dataclass(frozen=True)
class BooleanValue:
    value: bool

    def to_line(self) -> str:
        return "true" if self.value else "false"

    def to_tag(self) -> str:
        return self.to_line()


Value = Union[StringValue, IntegerValue, FloatValue, BooleanValue]
Scalar = Union[str, int, float, bool]

_VALUE_TYPES = (StringValue, IntegerValue, FloatValue, BooleanValue)


def value_of(obj: Value | Scalar) -> Value:
    """Wrap a Python scalar in the matching variant.

    ``bool`` is checked before ``int`` since it is a subclass of it. Values
    that are already wrapped pass through untouched.
    """
    if isinstance(obj, _VALUE_TYPES):
        return obj
    if isinstance(obj, bool):
        return BooleanValue(obj)
    if isinstance(obj, int):
        return IntegerValue(obj)
    if isinstance(obj, float):
        return FloatValue(obj)
    if isinstance(obj, str):
        return StringValue(obj)
    raise TypeError(f"Unsupported value type: {type(obj).__name__}")


__all__ = [
    "BooleanValue",
    "FloatValue",
    "IntegerValue",
    "Scalar",
    "StringValue",
    "Value",
    "value_of",
]
