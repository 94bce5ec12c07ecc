"""
Sig: one call site, correlated traces and logs.

Usage::

    import sig

    sig.configure(tracing=tracer, logging=structlog.get_logger("app"))

    def handle(ctx):
        work = sig.start(ctx)
        work.info("processing", {"user_id": 123})
        work.end()
"""

from sig.caller import CallerIdentity, CallerResolver, FrameResolver, StaticResolver
from sig.registry import (
    Telemetry,
    configure,
    from_settings,
    get_telemetry,
    reset,
    setup,
    start,
)
from sig.severity import Severity
from sig.sinks import LogRecord, LogSink, OTelLogSink, StructlogSink, as_log_sink
from sig.unit import UnitOfWork, WorkState

__all__ = [
    # Registry
    "Telemetry",
    "configure",
    "from_settings",
    "get_telemetry",
    "reset",
    "setup",
    "start",
    # Unit of work
    "UnitOfWork",
    "WorkState",
    "Severity",
    # Caller identity
    "CallerIdentity",
    "CallerResolver",
    "FrameResolver",
    "StaticResolver",
    # Log sinks
    "LogRecord",
    "LogSink",
    "OTelLogSink",
    "StructlogSink",
    "as_log_sink",
]
