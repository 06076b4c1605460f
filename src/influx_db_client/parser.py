"""Response decoding helpers shared by the sync and async clients."""

from __future__ import annotations

import json
from typing import Any, Iterator

from .errors import DecodingError, ServerError
from .types import CellValue, Node, QueryResult, Series

_DEFAULT_ERROR = "Error occurred"
_SCALARS = (str, int, float, bool)


def decode_query_response(body: bytes | str, *, strict: bool = True) -> QueryResult:
    """Decode a single JSON envelope into a ``QueryResult``.

    With ``strict`` (the default) a server error embedded in the envelope is
    raised as ``ServerError``. Otherwise it is left on the result for the
    caller to inspect.
    """
    text = _decode_body(body)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodingError(f"Invalid JSON response: {exc}", context=text[:200]) from exc
    return parse_envelope(parsed, strict=strict)


def iter_chunked_responses(body: bytes | str, *, strict: bool = True) -> Iterator[QueryResult]:
    """Yield one ``QueryResult`` per JSON document in a chunked response.

    Chunked responses are newline delimited, but any whitespace separated
    run of documents is accepted.
    """
    text = _decode_body(body)
    decoder = json.JSONDecoder()
    idx = 0
    length = len(text)
    while True:
        while idx < length and text[idx].isspace():
            idx += 1
        if idx >= length:
            return
        try:
            parsed, idx = decoder.raw_decode(text, idx)
        except json.JSONDecodeError as exc:
            raise DecodingError(f"Invalid JSON chunk at offset {idx}: {exc}") from exc
        yield parse_envelope(parsed, strict=strict)


def parse_envelope(parsed: Any, *, strict: bool = True) -> QueryResult:
    if not isinstance(parsed, dict):
        raise DecodingError("Query response must be a JSON object", context=parsed)

    error = _optional_str(parsed.get("error"), "error")
    if strict and error is not None:
        raise ServerError(error, context=parsed)
    if "results" not in parsed or parsed["results"] is None:
        return QueryResult(results=None, error=error)

    results = parsed["results"]
    if not isinstance(results, list):
        raise DecodingError("'results' must be a list", context=results)
    result = QueryResult(results=[_parse_node(node) for node in results], error=error)
    return raise_for_result(result) if strict else result


def raise_for_result(result: QueryResult) -> QueryResult:
    """Raise ``ServerError`` for the top-level error, then for the first statement error."""
    if result.error is not None:
        raise ServerError(result.error, context=result)
    for node in result.results or []:
        if node.error is not None:
            raise ServerError(node.error, context=node)
    return result


def extract_error_message(body: bytes | str | None) -> str:
    if not body:
        return _DEFAULT_ERROR
    text = _decode_body(body)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text.strip() or _DEFAULT_ERROR

    if isinstance(parsed, dict) and "error" in parsed:
        message = parsed["error"]
        if isinstance(message, str):
            return message
        return str(message)
    return text.strip() or _DEFAULT_ERROR


def _parse_node(raw: Any) -> Node:
    if not isinstance(raw, dict):
        raise DecodingError("Statement result must be a JSON object", context=raw)

    statement_id = raw.get("statement_id")
    if statement_id is not None and (isinstance(statement_id, bool) or not isinstance(statement_id, int)):
        raise DecodingError("'statement_id' must be an integer", context=raw)

    series = raw.get("series")
    if series is None:
        series = []
    if not isinstance(series, list):
        raise DecodingError("'series' must be a list", context=raw)

    return Node(
        statement_id=statement_id,
        series=[_parse_series(item) for item in series],
        error=_optional_str(raw.get("error"), "error"),
    )


def _parse_series(raw: Any) -> Series:
    if not isinstance(raw, dict):
        raise DecodingError("Series must be a JSON object", context=raw)

    name = raw.get("name", "")
    if not isinstance(name, str):
        raise DecodingError("Series 'name' must be a string", context=raw)

    columns = raw.get("columns")
    if columns is None:
        columns = []
    if not isinstance(columns, list) or not all(isinstance(column, str) for column in columns):
        raise DecodingError("Series 'columns' must be a list of strings", context=raw)

    rows = raw.get("values")
    if rows is None:
        rows = []
    if not isinstance(rows, list):
        raise DecodingError("Series 'values' must be a list", context=raw)

    tags = raw.get("tags")
    if tags is not None and not isinstance(tags, dict):
        raise DecodingError("Series 'tags' must be an object", context=raw)

    return Series(
        name=name,
        columns=list(columns),
        values=[_parse_row(row) for row in rows],
        tags=tags,
    )


def _parse_row(row: Any) -> list[CellValue]:
    if not isinstance(row, list):
        raise DecodingError("Series rows must be lists", context=row)
    for cell in row:
        if cell is not None and not isinstance(cell, _SCALARS):
            raise DecodingError(f"Unsupported cell value: {cell!r}", context=row)
    return list(row)


def _optional_str(value: Any, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodingError(f"'{key}' must be a string", context=value)
    return value


def _decode_body(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


__all__ = [
    "decode_query_response",
    "extract_error_message",
    "iter_chunked_responses",
    "parse_envelope",
    "raise_for_result",
]
