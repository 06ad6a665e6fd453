"""Logging infrastructure for the toolkit broker.

Logs go to stderr because stdout carries the MCP stdio transport. Every
record carries the id of the broker call it was emitted under, so a slow or
failing provider call can be followed through the log.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

# Request ID tracking for call-level correlation
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get the current request ID if available."""
    return request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """Ensure every record has a ``request_id`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()

    if format_string is None:
        format_string = (
            "%(asctime)s [%(levelname)s] [%(name)s] [request=%(request_id)s] %(message)s"
        )

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(RequestIdFilter())
    logger.addHandler(console_handler)

    # Disable noisy third-party loggers
    logging.getLogger("httpx").setLevel("WARNING")
    logging.getLogger("httpx").propagate = False
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("asyncio").propagate = False

    return logger


class RequestLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds request ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        request_id = get_request_id()
        if request_id is not None:
            extra["request_id"] = request_id
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> RequestLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).
    """
    return RequestLoggerAdapter(logging.getLogger(name), {})
