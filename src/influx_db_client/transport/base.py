"""Common transport abstractions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Literal, Mapping, Protocol, runtime_checkable

TransportKind = Literal["http", "udp"]
HttpMethod = Literal["GET", "POST"]


@dataclass
class TransportResponse:
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class Transport(Protocol):
    Kind = TransportKind

    @property
    def kind(self) -> TransportKind: ...

    def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse: ...

    def close(self) -> None: ...


@runtime_checkable
class AsyncTransport(Protocol):
    @property
    def kind(self) -> TransportKind: ...

    def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Awaitable[TransportResponse]: ...

    async def close(self) -> None: ...


__all__ = ["AsyncTransport", "HttpMethod", "Transport", "TransportKind", "TransportResponse"]
