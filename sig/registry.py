"""Capability registry.

``Telemetry`` is the configuration a unit of work runs against: which of
tracing, metrics and logging are present and the handles to them. It is
immutable; ``replace`` derives a new one. A process-wide default backs the
module-level ``configure``/``start`` API and is meant to be set once during
single-threaded startup.
"""

from typing import Any

from opentelemetry.context import Context
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sig.caller import CallerIdentity, FrameResolver
from sig.sinks import OTelLogSink, StructlogSink, as_log_sink
from sig.unit import UnitOfWork
from sig_config.settings import Settings
from sig_obs.logging import get_logger, get_record_logger, setup_logging
from sig_obs.metrics import enable_self_metrics
from sig_obs.tracing import get_meter, get_otel_logger, get_tracer

logger = get_logger(__name__)


class Telemetry(BaseModel):
    """Backends available to units of work; a signal is enabled iff its handle is set."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tracer: Any | None = None
    meter: Any | None = None
    log_sink: Any | None = None
    resolver: Any = Field(default_factory=FrameResolver)

    @field_validator("log_sink", mode="before")
    @classmethod
    def adapt_log_sink(cls, value: Any) -> Any:
        return as_log_sink(value)

    @property
    def tracing_enabled(self) -> bool:
        return self.tracer is not None

    @property
    def metrics_enabled(self) -> bool:
        return self.meter is not None

    @property
    def logging_enabled(self) -> bool:
        return self.log_sink is not None

    @property
    def active(self) -> bool:
        """True when a unit of work would reach any backend."""
        return self.tracing_enabled or self.logging_enabled

    def replace(self, tracer: Any = None, meter: Any = None, logging: Any = None) -> "Telemetry":
        """Copy with the given handles overwritten; None leaves a handle as it is."""
        return Telemetry(
            tracer=tracer if tracer is not None else self.tracer,
            meter=meter if meter is not None else self.meter,
            log_sink=logging if logging is not None else self.log_sink,
            resolver=self.resolver,
        )

    def start(self, context: Context | None = None, *, caller: CallerIdentity | None = None) -> UnitOfWork:
        """Begin a unit of work as a child of ``context`` (default: the current context)."""
        return UnitOfWork._open(self, context, caller)


_telemetry = Telemetry()


def configure(tracing: Any = None, metrics: Any = None, logging: Any = None) -> None:
    """
    Set process-wide backends.

    Only the arguments given are overwritten. Call once at startup, before
    any unit of work is started; there is no locking.
    """
    global _telemetry
    _telemetry = _telemetry.replace(tracer=tracing, meter=metrics, logging=logging)


def get_telemetry() -> Telemetry:
    """The process-wide configuration."""
    return _telemetry


def reset() -> None:
    """Drop all process-wide backends."""
    global _telemetry
    _telemetry = Telemetry()


def start(context: Context | None = None, *, caller: CallerIdentity | None = None) -> UnitOfWork:
    """Begin a unit of work against the process-wide configuration."""
    return UnitOfWork._open(_telemetry, context, caller)


def from_settings(settings: Settings) -> Telemetry:
    """
    Build a configuration from the global OpenTelemetry providers.

    Looks up handles only; providers and exporters must already be set.
    """
    log_sink = None
    if settings.SIG_LOGGING_ENABLED:
        if settings.SIG_LOG_BACKEND == "otel":
            log_sink = OTelLogSink(get_otel_logger(settings))
        else:
            log_sink = StructlogSink(get_record_logger(settings))

    return Telemetry(
        tracer=get_tracer(settings),
        meter=get_meter(settings),
        log_sink=log_sink,
    )


def setup(settings: Settings) -> Telemetry:
    """
    Startup wiring: diagnostics logging, self-metrics, process-wide backends.

    Returns the resulting process-wide configuration.
    """
    setup_logging(settings)
    enable_self_metrics(settings.SIG_SELF_METRICS_ENABLED)

    telemetry = from_settings(settings)
    configure(
        tracing=telemetry.tracer,
        metrics=telemetry.meter,
        logging=telemetry.log_sink,
    )
    logger.info(
        "sig_configured",
        tracing=_telemetry.tracing_enabled,
        metrics=_telemetry.metrics_enabled,
        logging=_telemetry.logging_enabled,
    )
    return _telemetry
