"""Shared typing helpers and the decoded query result tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

CellValue = Union[str, int, float, bool, None]
NormalizedRecord = dict[str, CellValue]


class Precision(str, Enum):
    """Timestamp units understood by the ``precision`` and ``epoch`` parameters."""

    NANOSECONDS = "n"
    MICROSECONDS = "u"
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "m"
    HOURS = "h"

    @classmethod
    def coerce(cls, value: "Precision | str | None", default: "Precision | None" = None) -> "Precision | None":
        if value is None:
            return default
        if isinstance(value, Precision):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        if not isinstance(value, str):
            raise ValueError(f"Unknown precision: {value!r}")
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown precision: {value!r}") from None


@dataclass
class Series:
    name: str
    columns: list[str]
    values: list[list[CellValue]] = field(default_factory=list)
    tags: dict[str, Any] | None = None

    def records(self) -> list[NormalizedRecord]:
        """Rows as dicts keyed by column name."""
        return [dict(zip(self.columns, row)) for row in self.values]


@dataclass
class Node:
    """The result of one statement in a query."""

    statement_id: int | None = None
    series: list[Series] = field(default_factory=list)
    error: str | None = None


@dataclass
class QueryResult:
    """The full response envelope; ``results`` is None when the server sent none."""

    results: list[Node] | None = None
    error: str | None = None


@dataclass
class ExecuteResult(Generic[T]):
    ok: bool
    data: T | None = None
    error: Exception | None = None


__all__ = [
    "CellValue",
    "ExecuteResult",
    "Node",
    "NormalizedRecord",
    "Precision",
    "QueryResult",
    "Series",
]
