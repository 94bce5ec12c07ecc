"""Ambient Observability Tests (structlog setup, handle lookup, self-metrics)."""

import io
import json

import structlog
from prometheus_client import REGISTRY

from sig.registry import Telemetry
from sig_config.settings import Settings
from sig_obs import metrics
from sig_obs.logging import add_timestamp, get_logger, get_record_logger, setup_logging
from sig_obs.tracing import get_meter, get_otel_logger, get_tracer


def sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_add_timestamp_keeps_existing_timestamp():
    """Test record timestamps are not overwritten by the stamper."""
    event_dict = {"event": "started", "timestamp": "2023-11-14T22:13:20+00:00"}
    assert add_timestamp(None, "info", event_dict)["timestamp"] == "2023-11-14T22:13:20+00:00"


def test_add_timestamp_stamps_missing():
    """Test diagnostics without a timestamp get one."""
    assert "timestamp" in add_timestamp(None, "info", {"event": "sig_configured"})


def test_setup_logging_text_format():
    """Test structlog configures with the console renderer."""
    try:
        setup_logging(Settings(LOG_FORMAT="text", LOG_LEVEL="DEBUG"))
        assert structlog.is_configured()
        assert get_logger("sig.tests") is not None
    finally:
        structlog.reset_defaults()


def test_record_logger_ignores_log_level():
    """Test debug records are written even when diagnostics are set to ERROR."""
    buffer = io.StringIO()
    logger = get_record_logger(Settings(LOG_LEVEL="ERROR", LOG_FORMAT="json"), file=buffer)

    logger.debug("started", severity="TRACE", timestamp="2023-11-14T22:13:20+00:00")

    line = json.loads(buffer.getvalue())
    assert line["event"] == "started"
    assert line["severity"] == "TRACE"
    assert line["timestamp"] == "2023-11-14T22:13:20+00:00"
    assert line["logger"] == "sig"


def test_handle_lookup_respects_switches():
    """Test disabled signals return no handle."""
    off = Settings(SIG_TRACING_ENABLED=False, SIG_METRICS_ENABLED=False, SIG_LOGGING_ENABLED=False)
    assert get_tracer(off) is None
    assert get_meter(off) is None
    assert get_otel_logger(off) is None

    on = Settings(SIG_TRACING_ENABLED=True, SIG_METRICS_ENABLED=True, SIG_LOGGING_ENABLED=True)
    assert get_tracer(on) is not None
    assert get_meter(on) is not None
    assert get_otel_logger(on) is not None


def test_self_metrics_disabled_by_default(log_sink):
    """Test nothing is counted until enabled."""
    before = sample("sig_events_emitted_total", {"severity": "INFO"})
    Telemetry(log_sink=log_sink).start().info("quiet")
    assert sample("sig_events_emitted_total", {"severity": "INFO"}) == before


def test_self_metrics_count_units_and_events(log_sink):
    """Test units, events and drops are counted when enabled."""
    metrics.enable_self_metrics()
    started = sample("sig_units_started_total", {"mode": "observed"})
    inert = sample("sig_units_started_total", {"mode": "inert"})
    emitted = sample("sig_events_emitted_total", {"severity": "WARN"})
    empty = sample("sig_events_dropped_total", {"reason": "empty_event"})
    ended = sample("sig_events_dropped_total", {"reason": "ended"})

    unit = Telemetry(log_sink=log_sink).start()
    unit.warn("slow")
    unit.warn("")
    unit.end()
    unit.info("late")
    Telemetry().start()

    assert sample("sig_units_started_total", {"mode": "observed"}) == started + 1
    assert sample("sig_units_started_total", {"mode": "inert"}) == inert + 1
    assert sample("sig_events_emitted_total", {"severity": "WARN"}) == emitted + 1
    assert sample("sig_events_dropped_total", {"reason": "empty_event"}) == empty + 1
    assert sample("sig_events_dropped_total", {"reason": "ended"}) == ended + 1
