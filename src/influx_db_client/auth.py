"""Authentication utilities for the Python client."""

from __future__ import annotations

from typing import Mapping

from .errors import AuthenticationError
from .logger import BoundLogger


class AuthManager:
    """Attaches the configured credentials to outgoing HTTP requests.

    InfluxDB 1.x accepts a username and password as the ``u``/``p`` query
    parameters and a token in the ``Authorization`` header. Both can be set.
    """

    def __init__(
        self,
        username: str | None,
        password: str | None,
        logger: BoundLogger,
        *,
        token: str | None = None,
        token_scheme: str = "Bearer",
    ) -> None:
        if bool(username) != bool(password):
            raise AuthenticationError("Username and password must be configured together")
        self.username = username
        self.password = password
        self.token = token
        self.token_scheme = token_scheme
        self._logger = logger.child("auth")

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def add_query_params(self, params: Mapping[str, str] | None = None) -> dict[str, str]:
        merged = dict(params or {})
        if not self.has_credentials:
            return merged

        self._logger.trace("Attaching credentials for user %s", self.username)
        merged["u"] = self.username or ""
        merged["p"] = self.password or ""
        return merged

    def add_http_headers(self, headers: Mapping[str, str] | None = None) -> dict[str, str]:
        merged = dict(headers or {})
        if not self.has_token:
            return merged

        merged["Authorization"] = f"{self.token_scheme} {self.token}"
        return merged


__all__ = ["AuthManager"]
