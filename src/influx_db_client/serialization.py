"""Line protocol escaping and InfluxQL quoting helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .point import Point

_MEASUREMENT_ESCAPES = str.maketrans({",": r"\,", " ": r"\ "})
_KEY_ESCAPES = str.maketrans({",": r"\,", "=": r"\=", " ": r"\ "})
_FIELD_STRING_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"'})


def escape_measurement(name: str) -> str:
    return name.translate(_MEASUREMENT_ESCAPES)


def escape_key(key: str) -> str:
    """Escape a tag key, tag value or field key."""
    return key.translate(_KEY_ESCAPES)


def escape_field_string(text: str) -> str:
    """Escape the body of a string field value (the caller adds the quotes)."""
    return text.translate(_FIELD_STRING_ESCAPES)


def line_serialization(points: Iterable[Point]) -> str:
    """Render points as newline separated line protocol.

    Points are rendered in order and the first one that fails to encode
    aborts the whole batch, so nothing partial ever reaches the wire.
    """
    return "\n".join(point.serialize() for point in points)


def quote_ident(identifier: str) -> str:
    """Quote an InfluxQL identifier such as a database or user name."""
    escaped = identifier.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def quote_literal(literal: str) -> str:
    """Quote an InfluxQL string literal such as a password."""
    escaped = literal.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


__all__ = [
    "escape_field_string",
    "escape_key",
    "escape_measurement",
    "line_serialization",
    "quote_ident",
    "quote_literal",
]
