"""
Sig Observability Package.

The library's own ambient observability:
- Structured diagnostics logging (structlog)
- OpenTelemetry handle lookup (tracer, meter, logs-API logger)
- Self-metrics (Prometheus)
"""

__all__ = ["tracing", "metrics", "logging"]
