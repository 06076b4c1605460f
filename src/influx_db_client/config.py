"""Immutable connection settings for a client instance."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping

from .logger import LogLevel

DEFAULT_BASE_URL = "http://localhost:8086"
DEFAULT_DATABASE = "test"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    database: str = DEFAULT_DATABASE
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    token: str | None = field(default=None, repr=False)
    token_scheme: str = "Bearer"
    timeout: float = 60.0
    default_headers: tuple[tuple[str, str], ...] = ()
    log_level: LogLevel = "info"

    def __post_init__(self) -> None:
        # mappings are stored as sorted pairs
        if isinstance(self.default_headers, Mapping):
            object.__setattr__(self, "default_headers", tuple(sorted(self.default_headers.items())))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build a config from ``INFLUXDB_*`` environment variables."""
        env = os.environ if environ is None else environ
        timeout = env.get("INFLUXDB_TIMEOUT")
        return cls(
            base_url=env.get("INFLUXDB_URL", DEFAULT_BASE_URL),
            database=env.get("INFLUXDB_DATABASE", DEFAULT_DATABASE),
            username=env.get("INFLUXDB_USERNAME") or None,
            password=env.get("INFLUXDB_PASSWORD") or None,
            token=env.get("INFLUXDB_TOKEN") or None,
            timeout=float(timeout) if timeout else 60.0,
        )

    def with_database(self, database: str) -> "ClientConfig":
        return replace(self, database=database)

    def with_authentication(self, username: str, password: str) -> "ClientConfig":
        return replace(self, username=username, password=password)

    def with_token(self, token: str, scheme: str = "Bearer") -> "ClientConfig":
        return replace(self, token=token, token_scheme=scheme)


__all__ = ["ClientConfig", "DEFAULT_BASE_URL", "DEFAULT_DATABASE"]
