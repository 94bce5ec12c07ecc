"""
Structured Logging (structlog).

Two loggers share one rendering setup:
- diagnostics (``get_logger``): the library's own messages, routed through
  stdlib logging and gated by LOG_LEVEL
- records (``get_record_logger``): the logging backend behind
  ``StructlogSink``; every record is written regardless of LOG_LEVEL
"""

import logging
import sys
from typing import Any, TextIO

import structlog

from sig_config.settings import Settings

_stamper = structlog.processors.TimeStamper(fmt="iso", utc=True)


def add_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Stamp events that do not already carry a timestamp."""
    if "timestamp" in event_dict:
        return event_dict
    return _stamper(logger, method_name, event_dict)


def _renderer(settings: Settings) -> Any:
    if settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(settings: Settings) -> None:
    """Configure structlog diagnostics over stdlib logging (JSON or text)."""
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=settings.LOG_LEVEL.upper()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_timestamp,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured diagnostics logger."""
    return structlog.get_logger(name)


def get_record_logger(settings: Settings, file: TextIO | None = None) -> Any:
    """
    Logger that writes log-backend records.

    Independent of the global structlog configuration and of LOG_LEVEL:
    severity filtering belongs to whoever consumes the output. Records keep
    the timestamp they were emitted with.
    """
    return structlog.wrap_logger(
        structlog.PrintLogger(file),
        processors=[
            structlog.processors.add_log_level,
            add_timestamp,
            structlog.processors.UnicodeDecoder(),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
        context_class=dict,
    ).bind(logger=settings.OTEL_SERVICE_NAME)
