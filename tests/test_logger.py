import logging

from influx_db_client.logger import BoundLogger, create_logger


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def debug(self, msg, *args) -> None:
        self.lines.append(("debug", msg % args))

    def info(self, msg, *args) -> None:
        self.lines.append(("info", msg % args))

    def warning(self, msg, *args) -> None:
        self.lines.append(("warning", msg % args))

    def error(self, msg, *args) -> None:
        self.lines.append(("error", msg % args))


def test_threshold_filters_lower_levels() -> None:
    sink = RecordingLogger()
    logger = create_logger(logger=sink, level="info")
    logger.debug("hidden %d", 1)
    logger.info("shown %d", 2)
    logger.warn("careful")
    assert sink.lines == [("info", "shown 2"), ("warning", "careful")]


def test_trace_falls_back_to_debug_on_duck_typed_loggers() -> None:
    sink = RecordingLogger()
    create_logger(logger=sink, level="trace").trace("tick")
    assert sink.lines == [("debug", "tick")]


def test_child_uses_stdlib_hierarchy(caplog) -> None:
    base = BoundLogger(logging.getLogger("influx_db_client"), level="debug")
    with caplog.at_level(logging.DEBUG, logger="influx_db_client"):
        base.child("http").debug("HTTP %s", "POST")
    assert caplog.records[0].name == "influx_db_client.http"
    assert caplog.records[0].getMessage() == "HTTP POST"


def test_create_logger_reuses_bound_logger() -> None:
    bound = create_logger(level="error")
    assert create_logger(logger=bound) is bound
