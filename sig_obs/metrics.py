"""
Prometheus Self-Metrics.

Counts units of work and emitted events. Off until ``enable_self_metrics``
is called; the configured metrics backend is never touched from here.
"""

from prometheus_client import Counter

# ============================================================================
# COUNTERS
# ============================================================================

units_started_total = Counter(
    "sig_units_started_total",
    "Units of work started",
    ["mode"],  # observed, inert
)

events_emitted_total = Counter(
    "sig_events_emitted_total",
    "Events fanned out to the configured backends",
    ["severity"],  # TRACE, DEBUG, INFO, WARN, ERROR, FATAL
)

events_dropped_total = Counter(
    "sig_events_dropped_total",
    "Calls dropped without reaching any backend",
    ["reason"],  # empty_event, nil_error, ended
)

_enabled = False


def enable_self_metrics(enabled: bool = True) -> None:
    """Turn counting on or off process-wide."""
    global _enabled
    _enabled = enabled


def record_unit_started(mode: str) -> None:
    if _enabled:
        units_started_total.labels(mode=mode).inc()


def record_event(severity: str) -> None:
    if _enabled:
        events_emitted_total.labels(severity=severity).inc()


def record_drop(reason: str) -> None:
    if _enabled:
        events_dropped_total.labels(reason=reason).inc()
