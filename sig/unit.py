"""Unit of work.

A unit of work brackets one logical operation. Starting it opens a span and
writes a "started" record; every event goes to both the span and the log
stream with one shared timestamp and call-site line; ending it writes an
"ended" record and closes the span.

Whichever of tracing and logging are configured receive the calls. With
neither configured every operation is a no-op.
"""

from collections.abc import Mapping
from enum import Enum
import time
from typing import TYPE_CHECKING, Any, NamedTuple

from opentelemetry import context as otel_context
from opentelemetry.context import Context
from opentelemetry.trace import Span, Status, StatusCode, set_span_in_context

from sig.attributes import flatten, identity_attributes
from sig.caller import CallerIdentity
from sig.severity import Severity
from sig.sinks import LogRecord
from sig_obs import metrics
from sig_obs.logging import get_logger

if TYPE_CHECKING:
    from sig.registry import Telemetry

logger = get_logger(__name__)

# Frames between a resolver call in a private helper and the public call site:
# helper -> public method -> caller.
_CALL_SITE = 2


class WorkState(str, Enum):
    """Lifecycle state of a unit of work."""

    ACTIVE = "active"
    ENDED = "ended"


class Moment(NamedTuple):
    """Instant and call-site line captured once and shared by both backends."""

    timestamp: int
    line: int


def _describe(err: Any) -> str:
    return str(err) or type(err).__name__


class UnitOfWork:
    """
    One instrumented operation.

    Owned by a single call chain; not safe to share across threads. After
    ``end`` the unit is terminal and further calls are dropped.
    """

    def __init__(
        self,
        telemetry: "Telemetry",
        context: Context,
        identity: CallerIdentity | None = None,
        span: Span | None = None,
    ):
        self._telemetry = telemetry
        self._context = context
        self._identity = identity or CallerIdentity.blank()
        self._span = span
        self._state = WorkState.ACTIVE
        self._token: object | None = None

    @classmethod
    def _open(
        cls,
        telemetry: "Telemetry",
        context: Context | None = None,
        caller: CallerIdentity | None = None,
    ) -> "UnitOfWork":
        """
        Start a unit of work under ``telemetry``.

        Must be called directly from a public ``start`` so the resolved
        identity is that of ``start``'s caller.
        """
        if context is None:
            context = otel_context.get_current()

        if not telemetry.active:
            metrics.record_unit_started("inert")
            return cls(telemetry, context)

        identity = caller if caller is not None else telemetry.resolver.resolve(_CALL_SITE)
        now = time.time_ns()

        span = None
        if telemetry.tracing_enabled:
            span = telemetry.tracer.start_span(
                identity.function,
                context=context,
                attributes={"file": identity.file, "line": identity.line},
                start_time=now,
            )
            context = set_span_in_context(span, context)

        unit = cls(telemetry, context, identity, span)
        if telemetry.logging_enabled:
            unit._log("started", Severity.TRACE, Moment(now, identity.line), {})

        metrics.record_unit_started("observed")
        return unit

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def context(self) -> Context:
        """Propagation context; carries this unit's span when tracing is on."""
        return self._context

    @property
    def function(self) -> str:
        return self._identity.function

    @property
    def file(self) -> str:
        return self._identity.file

    @property
    def span(self) -> Span | None:
        return self._span

    @property
    def state(self) -> WorkState:
        return self._state

    @property
    def ended(self) -> bool:
        return self._state is WorkState.ENDED

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def trace(self, event: str, *attributes: Mapping[str, Any]) -> None:
        if self._accepts_event(event):
            self._emit(event, Severity.TRACE, attributes)

    def debug(self, event: str, *attributes: Mapping[str, Any]) -> None:
        if self._accepts_event(event):
            self._emit(event, Severity.DEBUG, attributes)

    def info(self, event: str, *attributes: Mapping[str, Any]) -> None:
        if self._accepts_event(event):
            self._emit(event, Severity.INFO, attributes)

    def warn(self, event: str, *attributes: Mapping[str, Any]) -> None:
        if self._accepts_event(event):
            self._emit(event, Severity.WARN, attributes)

    def error(self, err: BaseException | None, *attributes: Mapping[str, Any]) -> None:
        """Record ``err`` and mark the span as failed."""
        if self._accepts_error(err):
            self._emit(_describe(err), Severity.ERROR, attributes)

    def fatal(self, err: BaseException | None, *attributes: Mapping[str, Any]) -> None:
        if self._accepts_error(err):
            self._emit(_describe(err), Severity.FATAL, attributes)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def end(self) -> None:
        """Write the "ended" record and close the span."""
        self._close()

    def __enter__(self) -> "UnitOfWork":
        self._token = otel_context.attach(self._context)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc is not None and self._accepts_error(exc):
                self._emit(_describe(exc), Severity.ERROR, ())
        finally:
            if self._token is not None:
                otel_context.detach(self._token)
                self._token = None
            self._close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _live(self) -> bool:
        if not self._telemetry.active:
            return False
        if self._state is WorkState.ENDED:
            logger.debug("unit_of_work_already_ended", function=self._identity.function)
            metrics.record_drop("ended")
            return False
        return True

    def _accepts_event(self, event: str) -> bool:
        if not self._live():
            return False
        if not event:
            metrics.record_drop("empty_event")
            return False
        return True

    def _accepts_error(self, err: Any) -> bool:
        if not self._live():
            return False
        if err is None:
            metrics.record_drop("nil_error")
            return False
        return True

    def _close(self) -> None:
        live = self._live()
        self._state = WorkState.ENDED
        if not live:
            return

        moment = Moment(time.time_ns(), self._telemetry.resolver.resolve(_CALL_SITE).line)
        try:
            if self._telemetry.logging_enabled:
                self._log("ended", Severity.TRACE, moment, {})
        finally:
            if self._span is not None:
                self._span.end(end_time=moment.timestamp)

    def _emit(
        self, event: str, severity: Severity, attributes: tuple[Mapping[str, Any], ...]
    ) -> None:
        moment = Moment(time.time_ns(), self._telemetry.resolver.resolve(_CALL_SITE).line)

        if self._span is not None:
            span_attributes: dict[str, Any] = flatten(attributes)
            span_attributes["file"] = self._identity.file
            span_attributes["line"] = moment.line
            self._span.add_event(event, attributes=span_attributes, timestamp=moment.timestamp)
            if severity >= Severity.ERROR:
                self._span.set_status(Status(StatusCode.ERROR, event))

        if self._telemetry.logging_enabled:
            self._log(event, severity, moment, flatten(attributes))

        metrics.record_event(severity.text)

    def _log(
        self, body: str, severity: Severity, moment: Moment, attributes: dict[str, str]
    ) -> None:
        record = LogRecord(
            timestamp=moment.timestamp,
            severity=severity,
            severity_text=severity.text,
            body=body,
            attributes={**identity_attributes(self._identity, moment.line), **attributes},
        )
        self._telemetry.log_sink.emit(self._context, record)
