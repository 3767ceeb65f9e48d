"""
Log output for applications embedding the ICAO 9303 core.

Handlers go on the ``icao9303`` package logger only, so the host
application's root logger is left alone. :func:`icao9303.config.configure`
calls :func:`setup_logging` whenever it is given ``log_level`` or
``log_format``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO

from opentelemetry import trace

PACKAGE_LOGGER = "icao9303"

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(component)s] %(name)s: %(message)s"

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

LOG_OFF = "OFF"


class ComponentFilter(logging.Filter):
    """Tag each record with the subpackage that emitted it, e.g. ``mrz`` or ``vds``."""

    def filter(self, record: logging.LogRecord) -> bool:
        parts = record.name.split(".")
        record.component = parts[1] if len(parts) > 1 and parts[0] == PACKAGE_LOGGER else parts[0]
        return True


class TraceContextFilter(logging.Filter):
    """Attach the ids of the active OpenTelemetry span, or None outside a span."""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.trace_id = trace.format_trace_id(span_context.trace_id)
            record.span_id = trace.format_span_id(span_context.span_id)
        else:
            record.trace_id = None
            record.span_id = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "component": getattr(record, "component", None),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("trace_id", "span_id"):
            value = getattr(record, key, None)
            if value:
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    stream: IO[str] | None = None,
) -> logging.Logger:
    """
    Route the package's log records to ``stream`` (stdout by default).

    Args:
        log_level: A level name, or ``OFF`` to silence the package
        log_format: ``text``, ``json`` or a logging format string

    Returns:
        The configured ``icao9303`` logger. Calling again replaces its handler.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    level_name = log_level.upper()
    if level_name == LOG_OFF:
        package_logger.setLevel(logging.CRITICAL + 1)
        return package_logger
    if level_name not in LOG_LEVELS:
        msg = f"Unknown log level: {log_level}"
        raise ValueError(msg)
    package_logger.setLevel(LOG_LEVELS[level_name])

    if log_format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    elif log_format.lower() == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        formatter = logging.Formatter(log_format)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(ComponentFilter())
    handler.addFilter(TraceContextFilter())
    package_logger.addHandler(handler)

    package_logger.debug("Logging configured at %s", level_name)
    return package_logger
