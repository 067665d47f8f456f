"""Structured logging configuration and the host log sink."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from searchbridge.config.settings import ObservabilitySettings

PACKAGE_LOGGER = "searchbridge"
SINK_PREFIX = "[searchbridge]"


def setup_logging(settings: ObservabilitySettings | None = None) -> None:
    """Configure structured logging for the bridge.

    Args:
        settings: Observability settings. Uses defaults if None.
    """
    log_level = getattr(settings, "log_level", "info").upper() if settings else "INFO"
    log_format = getattr(settings, "log_format", "json") if settings else "json"

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # basicConfig leaves an already-configured root logger untouched
    logging.getLogger().setLevel(level)


class SinkHandler(logging.Handler):
    """Routes bridge log records to a host callback of shape ``(str) -> None``.

    Failures raised by the callback are swallowed.
    """

    def __init__(self, sink: Callable[[str], None]) -> None:
        super().__init__(level=logging.INFO)
        self.sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.levelno >= logging.WARNING:
                message = f"{record.levelname}: {message}"
            self.sink(f"{SINK_PREFIX} {message}")
        except Exception:
            pass


def set_log_sink(sink: Callable[[str], None] | None) -> None:
    """Install ``sink`` as the single host log callback, replacing any previous one.

    Passing ``None`` removes the current sink.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, SinkHandler):
            logger.removeHandler(handler)
    if sink is None:
        return
    logger.addHandler(SinkHandler(sink))
    if logger.level == logging.NOTSET or logger.level > logging.INFO:
        logger.setLevel(logging.INFO)


def clear_log_sink() -> None:
    set_log_sink(None)
