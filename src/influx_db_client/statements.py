"""InfluxQL statements behind the administrative helpers, and verb selection."""

from __future__ import annotations

import re

from .serialization import quote_ident, quote_literal
from .transport.base import HttpMethod

# Leading keywords of statements that change server state. The server
# rejects these over GET, so they must be sent as POST.
MUTATING_KEYWORDS = frozenset(
    {"alter", "create", "delete", "drop", "grant", "kill", "revoke", "set"}
)
PRIVILEGES = frozenset({"READ", "WRITE", "ALL"})

_LEADING_WORD = re.compile(r"\s*([A-Za-z]+)")
_INTO_CLAUSE = re.compile(r"\binto\b", re.IGNORECASE)


def select_method(query: str, method: str | None = None) -> HttpMethod:
    """Choose GET or POST for a query.

    An explicit ``method`` wins. Otherwise every ``;`` separated statement is
    inspected and POST is used if any of them is mutating; anything not on
    the list, including text that does not start with a keyword, is GET.
    """
    if method is not None:
        upper = method.upper()
        if upper not in ("GET", "POST"):
            raise ValueError(f"Unsupported query method: {method!r}")
        return upper  # type: ignore[return-value]

    for statement in query.split(";"):
        if _is_mutating(statement):
            return "POST"
    return "GET"


def _is_mutating(statement: str) -> bool:
    match = _LEADING_WORD.match(statement)
    if not match:
        return False
    keyword = match.group(1).lower()
    if keyword == "select":
        return bool(_INTO_CLAUSE.search(statement))
    return keyword in MUTATING_KEYWORDS


def create_database(name: str) -> str:
    return f"CREATE DATABASE {quote_ident(name)}"


def drop_database(name: str) -> str:
    return f"DROP DATABASE {quote_ident(name)}"


def drop_measurement(measurement: str) -> str:
    return f"DROP MEASUREMENT {quote_ident(measurement)}"


def create_user(user: str, password: str, admin: bool = False) -> str:
    statement = f"CREATE USER {quote_ident(user)} WITH PASSWORD {quote_literal(password)}"
    if admin:
        statement += " WITH ALL PRIVILEGES"
    return statement


def drop_user(user: str) -> str:
    return f"DROP USER {quote_ident(user)}"


def set_user_password(user: str, password: str) -> str:
    return f"SET PASSWORD FOR {quote_ident(user)} = {quote_literal(password)}"


def grant_admin_privileges(user: str) -> str:
    return f"GRANT ALL PRIVILEGES TO {quote_ident(user)}"


def revoke_admin_privileges(user: str) -> str:
    return f"REVOKE ALL PRIVILEGES FROM {quote_ident(user)}"


def grant_privilege(user: str, database: str, privilege: str) -> str:
    return f"GRANT {_privilege(privilege)} ON {quote_ident(database)} TO {quote_ident(user)}"


def revoke_privilege(user: str, database: str, privilege: str) -> str:
    return f"REVOKE {_privilege(privilege)} ON {quote_ident(database)} FROM {quote_ident(user)}"


def create_retention_policy(
    name: str,
    duration: str,
    replication: int | str,
    database: str,
    default: bool = False,
) -> str:
    """Durations such as ``1h``, ``90m``, ``7d`` or ``INF`` are passed through unquoted."""
    statement = (
        f"CREATE RETENTION POLICY {quote_ident(name)} ON {quote_ident(database)} "
        f"DURATION {duration} REPLICATION {replication}"
    )
    if default:
        statement += " DEFAULT"
    return statement


def drop_retention_policy(name: str, database: str) -> str:
    return f"DROP RETENTION POLICY {quote_ident(name)} ON {quote_ident(database)}"


def _privilege(privilege: str) -> str:
    upper = privilege.upper()
    if upper not in PRIVILEGES:
        raise ValueError(f"Privilege must be one of READ, WRITE or ALL, got {privilege!r}")
    return upper
