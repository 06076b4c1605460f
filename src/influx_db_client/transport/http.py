"""HTTP transports built on top of httpx."""

from __future__ import annotations

from typing import Mapping

import httpx

from ..errors import TransportError
from ..logger import BoundLogger, create_logger
from .base import HttpMethod, Transport, TransportResponse


class HttpTransport:
    kind: Transport.Kind = "http"

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None
        self._logger = (logger or create_logger()).child("http")

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        url = f"{self._endpoint}/{path.lstrip('/')}"
        try:
            self._logger.debug("HTTP %s %s bytes=%d", method, url, _size(content))
            response = self._client.request(
                method,
                url,
                params=params,
                content=content,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"HTTP request timeout after {self._timeout}s") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Cannot connect to {url}: {exc}") from exc
        return _to_transport_response(response, url, self._logger)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncHttpTransport:
    kind: Transport.Kind = "http"

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None
        self._logger = (logger or create_logger()).child("http")

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        url = f"{self._endpoint}/{path.lstrip('/')}"
        try:
            self._logger.debug("HTTP %s %s bytes=%d", method, url, _size(content))
            response = await self._client.request(
                method,
                url,
                params=params,
                content=content,
                headers=headers,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"HTTP request timeout after {self._timeout}s") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Cannot connect to {url}: {exc}") from exc
        return _to_transport_response(response, url, self._logger)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _to_transport_response(response: httpx.Response, url: str, logger: BoundLogger) -> TransportResponse:
    body = response.content
    logger.debug("HTTP <- %s status=%s bytes=%d", url, response.status_code, len(body))
    return TransportResponse(
        status=response.status_code,
        body=body,
        headers={k.lower(): v for k, v in response.headers.items()},
    )


def _size(content: str | bytes | None) -> int:
    if content is None:
        return 0
    if isinstance(content, str):
        return len(content.encode("utf-8"))
    return len(content)


__all__ = ["AsyncHttpTransport", "HttpTransport"]
