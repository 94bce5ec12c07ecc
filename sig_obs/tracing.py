"""
OpenTelemetry Handle Lookup.

Reads tracer, meter and logs-API logger from the globally registered
providers. Providers, processors and exporters are set up by the
application; nothing here constructs them.
"""

from opentelemetry import _logs, metrics, trace

from sig_config.settings import Settings


def get_tracer(settings: Settings) -> trace.Tracer | None:
    """Tracer for the configured service, or None when tracing is disabled."""
    if not settings.SIG_TRACING_ENABLED:
        return None
    return trace.get_tracer(settings.OTEL_SERVICE_NAME)


def get_meter(settings: Settings) -> metrics.Meter | None:
    """Meter for the configured service, or None when metrics are disabled."""
    if not settings.SIG_METRICS_ENABLED:
        return None
    return metrics.get_meter(settings.OTEL_SERVICE_NAME)


def get_otel_logger(settings: Settings) -> _logs.Logger | None:
    """Logs-API logger for the configured service, or None when logging is disabled."""
    if not settings.SIG_LOGGING_ENABLED:
        return None
    return _logs.get_logger(settings.OTEL_SERVICE_NAME)
