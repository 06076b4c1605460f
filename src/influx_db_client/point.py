"""Measurement records and their line protocol rendering."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from .errors import EncodingError
from .serialization import escape_key, escape_measurement, line_serialization
from .values import Scalar, Value, value_of


class Point:
    """A single measurement record.

    Tags and fields keep insertion order. Adding a key that already exists
    replaces its value without moving it, so the rendered line stays stable
    however a point was assembled::

        point = Point("cpu").add_tag("host", "a b").add_field("load", 0.5)
        point.serialize()  # 'cpu,host=a\\ b load=0.5'
    """

    __slots__ = ("measurement", "tags", "fields", "timestamp")

    def __init__(
        self,
        measurement: str,
        *,
        tags: Mapping[str, Value | Scalar] | None = None,
        fields: Mapping[str, Value | Scalar] | None = None,
        timestamp: int | None = None,
    ) -> None:
        self.measurement = measurement
        self.tags: dict[str, Value] = {}
        self.fields: dict[str, Value] = {}
        self.timestamp = timestamp
        for key, value in (tags or {}).items():
            self.add_tag(key, value)
        for key, value in (fields or {}).items():
            self.add_field(key, value)

    def add_tag(self, key: str, value: Value | Scalar) -> "Point":
        self.tags[key] = value_of(value)
        return self

    def add_field(self, key: str, value: Value | Scalar) -> "Point":
        self.fields[key] = value_of(value)
        return self

    def set_timestamp(self, timestamp: int | None) -> "Point":
        self.timestamp = timestamp
        return self

    def copy(self) -> "Point":
        return Point(
            self.measurement,
            tags=self.tags,
            fields=self.fields,
            timestamp=self.timestamp,
        )

    def serialize(self) -> str:
        if not self.measurement:
            raise EncodingError("Measurement name must not be empty", context=self)
        if not self.fields:
            raise EncodingError(
                f"Point {self.measurement!r} has no fields", context=self
            )

        _check_text(self.measurement, "Measurement", self)
        parts = [escape_measurement(self.measurement)]
        for key, value in self.tags.items():
            rendered = value.to_tag()
            if not key or not rendered:
                raise EncodingError(
                    f"Tag {key!r} on {self.measurement!r} needs a non-empty key and value",
                    context=self,
                )
            _check_text(key, "Tag key", self)
            _check_text(rendered, "Tag value", self)
            parts.append(f",{escape_key(key)}={escape_key(rendered)}")

        rendered_fields = []
        for key, value in self.fields.items():
            if not key:
                raise EncodingError(
                    f"Field on {self.measurement!r} has an empty key", context=self
                )
            _check_text(key, "Field key", self)
            rendered_fields.append(f"{escape_key(key)}={value.to_line()}")
        parts.append(" ")
        parts.append(",".join(rendered_fields))

        if self.timestamp is not None:
            if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
                raise EncodingError(
                    f"Timestamp must be an integer, got {type(self.timestamp).__name__}",
                    context=self,
                )
            parts.append(f" {self.timestamp}")
        return "".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return (
            self.measurement == other.measurement
            and list(self.tags.items()) == list(other.tags.items())
            and list(self.fields.items()) == list(other.fields.items())
            and self.timestamp == other.timestamp
        )

    def __repr__(self) -> str:
        return (
            f"Point(measurement={self.measurement!r}, tags={self.tags!r}, "
            f"fields={self.fields!r}, timestamp={self.timestamp!r})"
        )


def _check_text(text: str, what: str, point: Point) -> None:
    # trailing backslashes and line breaks have no escaped form
    if text.endswith("\\") or "\n" in text or "\r" in text:
        raise EncodingError(f"{what} {text!r} cannot be written as line protocol", context=point)


class Points:
    """An ordered batch of points written in a single request."""

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points: list[Point] = list(points)

    @classmethod
    def of(cls, *points: Point) -> "Points":
        return cls(points)

    def append(self, point: Point) -> "Points":
        self._points.append(point)
        return self

    def extend(self, points: Iterable[Point]) -> "Points":
        self._points.extend(points)
        return self

    def serialize(self) -> str:
        return line_serialization(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __repr__(self) -> str:
        return f"Points({self._points!r})"


def as_points(points: Points | Point | Iterable[Point]) -> Points:
    """Normalize anything the write calls accept into a ``Points`` batch."""
    if isinstance(points, Points):
        return points
    if isinstance(points, Point):
        return Points.of(points)
    return Points(points)


__all__ = ["Point", "Points", "as_points"]
