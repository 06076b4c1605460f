"""HTTP client for the InfluxDB 1.x write and query endpoints."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Iterator, Mapping, Union
from urllib.parse import urlparse

from . import statements
from .auth import AuthManager
from .config import ClientConfig
from .errors import (
    AuthenticationError,
    BadRequestError,
    DatabaseNotFoundError,
    InfluxDBError,
    ServerError,
    TransportError,
)
from .logger import LogLevel, create_logger
from .parser import decode_query_response, extract_error_message, iter_chunked_responses
from .point import Point, Points, as_points
from .transport import HttpMethod, HttpTransport, Transport, TransportResponse
from .types import ExecuteResult, Node, Precision, QueryResult

DEFAULT_PORT = 8086
VERSION_HEADER = "x-influxdb-version"

WritePayload = Union[Points, Point, Iterable[Point]]


def resolve_config(config: ClientConfig | None = None, **overrides: Any) -> ClientConfig:
    """Apply keyword overrides that are not None on top of ``config``."""
    base = config or ClientConfig()
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(base, **changes) if changes else base


def normalize_base_url(base_url: str) -> str:
    """Return ``scheme://host:port[/prefix]`` for an http(s) base URL.

    A bare ``host`` or ``host:port`` is treated as http, and a missing port
    falls back to 8086 in that case. With an explicit scheme the scheme's
    usual port applies.
    """
    has_scheme = "://" in base_url
    parsed = urlparse(base_url if has_scheme else f"http://{base_url}")
    scheme = parsed.scheme.lower()
    if scheme not in {"http", "https"}:
        raise ValueError(f"Unsupported scheme: {scheme}")

    host = parsed.hostname or "localhost"
    if ":" in host:
        host = f"[{host}]"
    if parsed.port:
        port = parsed.port
    elif has_scheme:
        port = 443 if scheme == "https" else 80
    else:
        port = DEFAULT_PORT
    return f"{scheme}://{host}:{port}{parsed.path or ''}".rstrip("/")


class BaseClient:
    """Request building and response handling shared by the sync and async clients."""

    def __init__(self, config: ClientConfig, logger: object | None) -> None:
        self.config = config
        self.base_url = normalize_base_url(config.base_url)
        self._logger = create_logger(logger=logger, level=config.log_level)
        self._auth_manager = AuthManager(
            config.username,
            config.password,
            self._logger,
            token=config.token,
            token_scheme=config.token_scheme,
        )
        self._default_headers = dict(config.default_headers)

    @property
    def database(self) -> str:
        return self.config.database

    def _headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = dict(self._default_headers)
        if extra:
            headers.update(extra)
        return self._auth_manager.add_http_headers(headers)

    def _prepare_write(
        self,
        points: WritePayload,
        precision: Precision | str | None,
        retention_policy: str | None,
    ) -> tuple[dict[str, str], str]:
        batch = as_points(points)
        body = batch.serialize()

        resolved = Precision.coerce(precision, Precision.SECONDS)
        assert resolved is not None
        params = {"db": self.database, "precision": resolved.value}
        if retention_policy:
            params["rp"] = retention_policy
        self._logger.debug(
            "Writing %d points to %s (precision=%s rp=%s)",
            len(batch),
            self.database,
            resolved.value,
            retention_policy,
        )
        return self._auth_manager.add_query_params(params), body

    def _prepare_query(
        self,
        q: str,
        epoch: Precision | str | None,
        *,
        method: str | None,
        database: str | None,
        chunked: bool = False,
        chunk_size: int | None = None,
    ) -> tuple[HttpMethod, dict[str, str]]:
        verb = statements.select_method(q, method)
        params = {"db": database or self.database, "q": q}
        resolved = Precision.coerce(epoch)
        if resolved is not None:
            params["epoch"] = resolved.value
        if chunked:
            params["chunked"] = "true"
            if chunk_size:
                params["chunk_size"] = str(chunk_size)
        self._logger.debug("Query %s db=%s chunked=%s", verb, params["db"], chunked)
        return verb, self._auth_manager.add_query_params(params)

    def _handle_write_response(self, response: TransportResponse) -> None:
        if response.ok:
            return
        self._raise_for_status(response)

    def _handle_query_response(self, response: TransportResponse) -> QueryResult:
        if not response.ok:
            self._raise_for_status(response)
        return decode_query_response(response.body)

    def _handle_chunked_response(self, response: TransportResponse) -> Iterator[QueryResult]:
        if not response.ok:
            self._raise_for_status(response)
        return iter_chunked_responses(response.body)

    def _raise_for_status(self, response: TransportResponse) -> None:
        status = response.status
        message = extract_error_message(response.body)
        self._logger.debug("Server returned %s: %s", status, message)
        if status == 400:
            raise BadRequestError(message, status=status)
        if status in {401, 403}:
            raise AuthenticationError(message, status=status)
        if status == 404:
            raise DatabaseNotFoundError(message, status=status)
        raise ServerError(message, status=status)

    @staticmethod
    def _version_from(response: TransportResponse) -> str | None:
        if response.status != 204:
            return None
        return response.headers.get(VERSION_HEADER, "unknown")


class InfluxDBClient(BaseClient):
    """Blocking client for one InfluxDB database.

    Settings are fixed at construction. Either pass a ``ClientConfig`` or the
    individual keyword arguments, which override the config's values::

        client = InfluxDBClient("http://localhost:8086", "metrics", username="root", password="root")
        client.write_point(Point("cpu").add_field("load", 0.5))
        nodes = client.query("SELECT * FROM cpu")
    """

    def __init__(
        self,
        base_url: str | None = None,
        database: str | None = None,
        *,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        default_headers: Mapping[str, str] | None = None,
        log_level: LogLevel | None = None,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
        logger: object | None = None,
    ) -> None:
        config = resolve_config(
            config,
            base_url=base_url,
            database=database,
            username=username,
            password=password,
            token=token,
            timeout=timeout,
            default_headers=default_headers,
            log_level=log_level,
        )
        super().__init__(config, logger)
        self._logger.info("Initializing InfluxDBClient for %s db=%s", self.base_url, self.database)
        self._transport = transport or HttpTransport(
            self.base_url, timeout=config.timeout, logger=self._logger
        )

    def __enter__(self) -> "InfluxDBClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    def ping(self) -> bool:
        try:
            response = self._transport.request("GET", "ping", headers=self._headers())
        except TransportError as exc:
            self._logger.debug("Ping failed: %s", exc)
            return False
        return response.status == 204

    def get_version(self) -> str | None:
        try:
            response = self._transport.request("GET", "ping", headers=self._headers())
        except TransportError as exc:
            self._logger.debug("Version probe failed: %s", exc)
            return None
        return self._version_from(response)

    def write_point(
        self,
        point: Point,
        precision: Precision | str | None = None,
        retention_policy: str | None = None,
    ) -> None:
        self.write_points(Points.of(point), precision, retention_policy)

    def write_points(
        self,
        points: WritePayload,
        precision: Precision | str | None = None,
        retention_policy: str | None = None,
    ) -> None:
        params, body = self._prepare_write(points, precision, retention_policy)
        response = self._transport.request(
            "POST",
            "write",
            params=params,
            content=body,
            headers=self._headers({"Content-Type": "text/plain; charset=utf-8"}),
        )
        self._handle_write_response(response)

    def write_safe(
        self,
        points: WritePayload,
        precision: Precision | str | None = None,
        retention_policy: str | None = None,
    ) -> ExecuteResult[None]:
        try:
            self.write_points(points, precision, retention_policy)
        except InfluxDBError as exc:
            return ExecuteResult(ok=False, error=exc)
        return ExecuteResult(ok=True)

    def query(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        method: str | None = None,
        database: str | None = None,
    ) -> list[Node] | None:
        return self.query_raw(q, epoch, method=method, database=database).results

    def query_raw(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        method: str | None = None,
        database: str | None = None,
    ) -> QueryResult:
        verb, params = self._prepare_query(q, epoch, method=method, database=database)
        response = self._transport.request(verb, "query", params=params, headers=self._headers())
        return self._handle_query_response(response)

    def query_safe(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        method: str | None = None,
        database: str | None = None,
    ) -> ExecuteResult[list[Node] | None]:
        try:
            data = self.query(q, epoch, method=method, database=database)
        except InfluxDBError as exc:
            return ExecuteResult(ok=False, error=exc)
        return ExecuteResult(ok=True, data=data)

    def query_chunked(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        chunk_size: int | None = None,
        method: str | None = None,
        database: str | None = None,
    ) -> Iterator[QueryResult]:
        """Run a chunked query and iterate over the decoded chunks.

        The request is sent before this returns. Each chunk is decoded as it
        is consumed, so a statement error surfaces from the iterator.
        """
        verb, params = self._prepare_query(
            q,
            epoch,
            method=method,
            database=database,
            chunked=True,
            chunk_size=chunk_size,
        )
        response = self._transport.request(verb, "query", params=params, headers=self._headers())
        return self._handle_chunked_response(response)

    def create_database(self, name: str) -> None:
        self._run(statements.create_database(name))

    def drop_database(self, name: str) -> None:
        self._run(statements.drop_database(name))

    def drop_measurement(self, measurement: str) -> None:
        self._run(statements.drop_measurement(measurement))

    def create_user(self, user: str, password: str, admin: bool = False) -> None:
        self._run(statements.create_user(user, password, admin))

    def drop_user(self, user: str) -> None:
        self._run(statements.drop_user(user))

    def set_user_password(self, user: str, password: str) -> None:
        self._run(statements.set_user_password(user, password))

    def grant_admin_privileges(self, user: str) -> None:
        self._run(statements.grant_admin_privileges(user))

    def revoke_admin_privileges(self, user: str) -> None:
        self._run(statements.revoke_admin_privileges(user))

    def grant_privilege(self, user: str, database: str, privilege: str) -> None:
        self._run(statements.grant_privilege(user, database, privilege))

    def revoke_privilege(self, user: str, database: str, privilege: str) -> None:
        self._run(statements.revoke_privilege(user, database, privilege))

    def create_retention_policy(
        self,
        name: str,
        duration: str,
        replication: int | str,
        default: bool = False,
        database: str | None = None,
    ) -> None:
        self._run(
            statements.create_retention_policy(
                name, duration, replication, database or self.database, default
            )
        )

    def drop_retention_policy(self, name: str, database: str | None = None) -> None:
        self._run(statements.drop_retention_policy(name, database or self.database))

    def _run(self, statement: str) -> None:
        self.query_raw(statement, method="POST")


__all__ = ["BaseClient", "InfluxDBClient", "normalize_base_url", "resolve_config"]
