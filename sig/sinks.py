"""Log sinks.

The logging backend is anything with ``emit(context, record)``. Two adapters
are provided: one over structlog, one over the OpenTelemetry logs API.
"""

from datetime import datetime, timezone
from typing import Any, Protocol

from opentelemetry import _logs, trace
from opentelemetry.context import Context
from pydantic import BaseModel, ConfigDict, Field

from sig.severity import Severity


class LogRecord(BaseModel):
    """A single structured log entry handed to a sink."""

    model_config = ConfigDict(frozen=True)

    timestamp: int  # nanoseconds since the epoch
    severity: Severity
    severity_text: str
    body: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class LogSink(Protocol):
    """Logging backend interface."""

    def emit(self, context: Context | None, record: LogRecord) -> None:
        ...


# structlog / stdlib method per severity
_METHODS = {
    Severity.TRACE: "debug",
    Severity.DEBUG: "debug",
    Severity.INFO: "info",
    Severity.WARN: "warning",
    Severity.ERROR: "error",
    Severity.FATAL: "critical",
}

# Keys the sink writes itself; "event" is structlog's positional argument
_RESERVED = ("event", "severity", "timestamp", "trace_id", "span_id")


class StructlogSink:
    """
    Writes records through a structlog logger.

    The record body becomes the event; attributes become key/value pairs
    alongside ``severity``, an ISO-8601 ``timestamp`` and, when the context
    carries a valid span, ``trace_id``/``span_id``.
    """

    def __init__(self, logger: Any):
        self.logger = logger

    def emit(self, context: Context | None, record: LogRecord) -> None:
        fields = dict(record.attributes)
        for key in _RESERVED:
            if key in fields:
                fields[f"{key}_attribute"] = fields.pop(key)
        fields["severity"] = record.severity_text
        fields["timestamp"] = (
            datetime.fromtimestamp(record.timestamp / 1e9, tz=timezone.utc).isoformat()
        )

        span_context = trace.get_current_span(context).get_span_context()
        if span_context.is_valid:
            fields["trace_id"] = format(span_context.trace_id, "032x")
            fields["span_id"] = format(span_context.span_id, "016x")

        getattr(self.logger, _METHODS[record.severity])(record.body, **fields)


class OTelLogSink:
    """Writes records through an OpenTelemetry logs-API ``Logger``."""

    def __init__(self, logger: _logs.Logger):
        self.logger = logger

    def emit(self, context: Context | None, record: LogRecord) -> None:
        self.logger.emit(
            _logs.LogRecord(
                timestamp=record.timestamp,
                context=context,
                severity_text=record.severity_text,
                severity_number=_logs.SeverityNumber(int(record.severity)),
                body=record.body,
                attributes=dict(record.attributes),
            )
        )


def as_log_sink(backend: Any) -> Any:
    """
    Adapt a logging backend to the sink interface.

    OpenTelemetry loggers and structlog loggers are wrapped; anything else is
    assumed to implement ``emit(context, record)`` already.
    """
    if backend is None or isinstance(backend, (StructlogSink, OTelLogSink)):
        return backend
    if isinstance(backend, _logs.Logger):
        return OTelLogSink(backend)
    if hasattr(backend, "bind"):
        return StructlogSink(backend)
    return backend
