"""Asynchronous variant of ``InfluxDBClient`` built on ``httpx.AsyncClient``."""

from __future__ import annotations

from typing import Mapping

from . import statements
from .client import BaseClient, WritePayload, resolve_config
from .config import ClientConfig
from .errors import InfluxDBError, TransportError
from .logger import LogLevel
from .point import Point, Points
from .transport import AsyncHttpTransport, AsyncTransport
from .types import ExecuteResult, Node, Precision, QueryResult


class AsyncInfluxDBClient(BaseClient):
    """Same operations as ``InfluxDBClient``; every network call is awaited."""

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
        transport: AsyncTransport | None = None,
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
        self._logger.info("Initializing AsyncInfluxDBClient for %s db=%s", self.base_url, self.database)
        self._transport = transport or AsyncHttpTransport(
            self.base_url, timeout=config.timeout, logger=self._logger
        )

    async def __aenter__(self) -> "AsyncInfluxDBClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._transport.close()

    async def ping(self) -> bool:
        try:
            response = await self._transport.request("GET", "ping", headers=self._headers())
        except TransportError as exc:
            self._logger.debug("Ping failed: %s", exc)
            return False
        return response.status == 204

    async def get_version(self) -> str | None:
        try:
            response = await self._transport.request("GET", "ping", headers=self._headers())
        except TransportError as exc:
            self._logger.debug("Version probe failed: %s", exc)
            return None
        return self._version_from(response)

    async def write_point(
        self,
        point: Point,
        precision: Precision | str | None = None,
        retention_policy: str | None = None,
    ) -> None:
        await self.write_points(Points.of(point), precision, retention_policy)

    async def write_points(
        self,
        points: WritePayload,
        precision: Precision | str | None = None,
        retention_policy: str | None = None,
    ) -> None:
        params, body = self._prepare_write(points, precision, retention_policy)
        response = await self._transport.request(
            "POST",
            "write",
            params=params,
            content=body,
            headers=self._headers({"Content-Type": "text/plain; charset=utf-8"}),
        )
        self._handle_write_response(response)

    async def write_safe(
        self,
        points: WritePayload,
        precision: Precision | str | None = None,
        retention_policy: str | None = None,
    ) -> ExecuteResult[None]:
        try:
            await self.write_points(points, precision, retention_policy)
        except InfluxDBError as exc:
            return ExecuteResult(ok=False, error=exc)
        return ExecuteResult(ok=True)

    async def query(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        method: str | None = None,
        database: str | None = None,
    ) -> list[Node] | None:
        result = await self.query_raw(q, epoch, method=method, database=database)
        return result.results

    async def query_raw(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        method: str | None = None,
        database: str | None = None,
    ) -> QueryResult:
        verb, params = self._prepare_query(q, epoch, method=method, database=database)
        response = await self._transport.request(verb, "query", params=params, headers=self._headers())
        return self._handle_query_response(response)

    async def query_safe(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        method: str | None = None,
        database: str | None = None,
    ) -> ExecuteResult[list[Node] | None]:
        try:
            data = await self.query(q, epoch, method=method, database=database)
        except InfluxDBError as exc:
            return ExecuteResult(ok=False, error=exc)
        return ExecuteResult(ok=True, data=data)

    async def query_chunked(
        self,
        q: str,
        epoch: Precision | str | None = None,
        *,
        chunk_size: int | None = None,
        method: str | None = None,
        database: str | None = None,
    ) -> list[QueryResult]:
        verb, params = self._prepare_query(
            q,
            epoch,
            method=method,
            database=database,
            chunked=True,
            chunk_size=chunk_size,
        )
        response = await self._transport.request(verb, "query", params=params, headers=self._headers())
        return list(self._handle_chunked_response(response))

    async def create_database(self, name: str) -> None:
        await self._run(statements.create_database(name))

    async def drop_database(self, name: str) -> None:
        await self._run(statements.drop_database(name))

    async def drop_measurement(self, measurement: str) -> None:
        await self._run(statements.drop_measurement(measurement))

    async def create_user(self, user: str, password: str, admin: bool = False) -> None:
        await self._run(statements.create_user(user, password, admin))

    async def drop_user(self, user: str) -> None:
        await self._run(statements.drop_user(user))

    async def set_user_password(self, user: str, password: str) -> None:
        await self._run(statements.set_user_password(user, password))

    async def grant_admin_privileges(self, user: str) -> None:
        await self._run(statements.grant_admin_privileges(user))

    async def revoke_admin_privileges(self, user: str) -> None:
        await self._run(statements.revoke_admin_privileges(user))

    async def grant_privilege(self, user: str, database: str, privilege: str) -> None:
        await self._run(statements.grant_privilege(user, database, privilege))

    async def revoke_privilege(self, user: str, database: str, privilege: str) -> None:
        await self._run(statements.revoke_privilege(user, database, privilege))

    async def create_retention_policy(
        self,
        name: str,
        duration: str,
        replication: int | str,
        default: bool = False,
        database: str | None = None,
    ) -> None:
        await self._run(
            statements.create_retention_policy(
                name, duration, replication, database or self.database, default
            )
        )

    async def drop_retention_policy(self, name: str, database: str | None = None) -> None:
        await self._run(statements.drop_retention_policy(name, database or self.database))

    async def _run(self, statement: str) -> None:
        await self.query_raw(statement, method="POST")


__all__ = ["AsyncInfluxDBClient"]
