"""Custom exceptions raised by the InfluxDB Python client."""

from __future__ import annotations

from typing import Any


class InfluxDBError(Exception):
    """Base error for all client failures."""

    def __init__(self, message: str, *, context: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class EncodingError(InfluxDBError):
    """Raised when a point cannot be rendered as line protocol."""


class TransportError(InfluxDBError):
    """Raised when the client cannot reach the server or send a datagram."""


class ServerError(InfluxDBError):
    """Raised when the server reports a failure, either by status or in the JSON body."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        context: Any | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status = status


class BadRequestError(ServerError):
    """Raised for 400 responses (line protocol or query syntax errors)."""


class AuthenticationError(ServerError):
    """Raised when credentials are rejected or misconfigured."""


class DatabaseNotFoundError(ServerError):
    """Raised when the target database does not exist."""


class DecodingError(InfluxDBError):
    """Raised when a query response cannot be decoded."""


__all__ = [
    "AuthenticationError",
    "BadRequestError",
    "DatabaseNotFoundError",
    "DecodingError",
    "EncodingError",
    "InfluxDBError",
    "ServerError",
    "TransportError",
]
