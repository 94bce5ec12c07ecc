"""Pytest fixtures."""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from sig import registry
from sig.registry import Telemetry
from sig_obs import metrics


class RecordingSink:
    """Log sink that keeps every record it is handed."""

    def __init__(self):
        self.records = []
        self.contexts = []

    def emit(self, context, record):
        self.contexts.append(context)
        self.records.append(record)

    @property
    def bodies(self):
        return [record.body for record in self.records]


@pytest.fixture
def span_exporter():
    """In-memory exporter receiving finished spans."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    """SDK tracer exporting synchronously to ``span_exporter``."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer("sig-tests")


@pytest.fixture
def log_sink():
    """Recording log sink."""
    return RecordingSink()


@pytest.fixture
def both(tracer, log_sink):
    """Tracing and logging enabled."""
    return Telemetry(tracer=tracer, log_sink=log_sink)


@pytest.fixture
def tracing_only(tracer):
    return Telemetry(tracer=tracer)


@pytest.fixture
def logging_only(log_sink):
    return Telemetry(log_sink=log_sink)


@pytest.fixture(autouse=True)
def reset_process_default():
    """Isolate tests from the process-wide configuration."""
    registry.reset()
    yield
    registry.reset()
    metrics.enable_self_metrics(False)
