"""Thin logging wrapper so callers can plug in any logger-shaped object."""

from __future__ import annotations

import logging
from typing import Any, Literal, Protocol

LogLevel = Literal["trace", "debug", "info", "warn", "error"]

LOGGER_NAME = "influx_db_client"
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

_STDLIB_LEVELS: dict[LogLevel, int] = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class LoggerProtocol(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


class BoundLogger:
    """Wraps a ``logging.Logger`` (or duck-typed object) behind a fixed threshold."""

    def __init__(self, logger: Any | None = None, *, level: LogLevel = "info") -> None:
        self._logger = logger or _default_logger()
        self._level = level
        self._threshold = _STDLIB_LEVELS[level]

    @property
    def level(self) -> LogLevel:
        return self._level

    def trace(self, msg: str, *args: Any) -> None:
        self._log(TRACE_LEVEL, "trace", msg, *args)

    def debug(self, msg: str, *args: Any) -> None:
        self._log(logging.DEBUG, "debug", msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._log(logging.INFO, "info", msg, *args)

    def warn(self, msg: str, *args: Any) -> None:
        self._log(logging.WARNING, "warning", msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._log(logging.ERROR, "error", msg, *args)

    def child(self, name: str) -> "BoundLogger":
        if isinstance(self._logger, logging.Logger):
            return BoundLogger(self._logger.getChild(name), level=self._level)
        return BoundLogger(self._logger, level=self._level)

    def _log(self, level: int, method: str, msg: str, *args: Any) -> None:
        if level < self._threshold:
            return
        if isinstance(self._logger, logging.Logger):
            self._logger.log(level, msg, *args)
            return
        handler = getattr(self._logger, method, None) or getattr(self._logger, "debug", None)
        if handler is not None:
            handler(msg, *args)


def _default_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def create_logger(*, logger: Any | None = None, level: LogLevel = "info") -> BoundLogger:
    if isinstance(logger, BoundLogger):
        return logger
    return BoundLogger(logger, level=level)


__all__ = ["BoundLogger", "LogLevel", "LoggerProtocol", "create_logger"]
