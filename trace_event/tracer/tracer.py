"""Tracer: hierarchical trace event emitter."""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Protocol

from ..clock import IClock, MonotonicClock
from ..composer import compose_event, resolve_defaults
from ..config import resolve_buffer_limit, resolve_output_mode
from ..logging_config import get_logger
from ..models import OutputMode, Phase, TracerOptions
from ..sink import IEventSink, LogSink, StreamSink

logger = get_logger(__name__)

_FROM_ENV: Any = object()


class ITracer(Protocol):
    """Emitter of begin/instant/end events with scoped children."""

    def child(self, fields: Mapping[str, Any] | None = None) -> "ITracer":
        """Create a child emitter inheriting this one's default fields."""
        ...

    def begin(self, fields: Any = None) -> None:
        """Emit a "b" event."""
        ...

    def instant(self, fields: Any = None) -> None:
        """Emit an "n" event."""
        ...

    def end(self, fields: Any = None) -> None:
        """Emit an "e" event."""
        ...


class Tracer:
    """
    A node in a tree of emitters sharing one sink.

    Default fields are resolved once at construction by copying the
    parent's defaults and overlaying `fields`; they never change afterwards.
    Every event is composed from those defaults and the call-site input
    (an event name or a dict of fields) and handed to the sink.
    """

    def __init__(
        self,
        sink: IEventSink,
        fields: Mapping[str, Any] | None = None,
        *,
        clock: IClock | None = None,
        parent: "Tracer | None" = None,
    ):
        self._sink = sink
        self._clock = clock if clock is not None else MonotonicClock()
        self.parent = parent

        parent_fields = parent.fields if parent is not None else None
        self._fields = MappingProxyType(resolve_defaults(parent_fields, fields))

    @property
    def fields(self) -> Mapping[str, Any]:
        """Resolved default fields (read-only)."""
        return self._fields

    @property
    def sink(self) -> IEventSink:
        return self._sink

    def child(self, fields: Mapping[str, Any] | None = None) -> "Tracer":
        """Create a child sharing this tracer's sink and clock."""
        return Tracer(self._sink, fields, clock=self._clock, parent=self)

    def begin(self, fields: Any = None) -> None:
        self._emit(Phase.BEGIN, fields)

    def instant(self, fields: Any = None) -> None:
        self._emit(Phase.INSTANT, fields)

    def end(self, fields: Any = None) -> None:
        self._emit(Phase.END, fields)

    @contextmanager
    def span(self, fields: Any = None) -> Iterator["Tracer"]:
        """Emit begin on entry and end on exit, with the same input."""
        self.begin(fields)
        try:
            yield self
        finally:
            self.end(fields)

    def _emit(self, phase: Phase, fields: Any) -> None:
        event = compose_event(self._fields, phase, fields, self._clock)
        self._sink.emit(event)


def create_tracer(
    fields: Mapping[str, Any] | None = None,
    output_mode: OutputMode | str | None = None,
    *,
    high_water_mark: int | None = None,
    max_buffered: int | None = _FROM_ENV,
    clock: IClock | None = None,
) -> Tracer:
    """
    Create a root Tracer writing to a new StreamSink.

    Args:
        fields: Default event fields; `cat` may be a string or a list.
        output_mode: "text" (JSON array body, default) or "record" (dicts).
                     Defaults to TRACE_EVENT_OUTPUT_MODE env var or "text".
        high_water_mark: Buffered chunk count at which the sink asks to be drained.
        max_buffered: Buffered chunk count at which emitting fails. None disables
                      the limit. Defaults to TRACE_EVENT_MAX_BUFFERED env var.
        clock: Clock override, mainly for tests.

    Returns:
        Root Tracer; its StreamSink is available as `tracer.sink`.
    """
    options: dict[str, Any] = {
        "fields": fields,
        "output_mode": output_mode if output_mode is not None else resolve_output_mode(),
        "max_buffered": resolve_buffer_limit() if max_buffered is _FROM_ENV else max_buffered,
    }
    if high_water_mark is not None:
        options["high_water_mark"] = high_water_mark
    opts = TracerOptions(**options)

    sink = StreamSink(
        mode=opts.output_mode,
        high_water_mark=opts.high_water_mark,
        max_buffered=opts.max_buffered,
    )
    logger.debug("Created root tracer in %s mode", opts.output_mode.value)
    return Tracer(sink, opts.fields, clock=clock)


def create_log_tracer(
    log: Any,
    fields: Mapping[str, Any] | None = None,
    *,
    clock: IClock | None = None,
) -> Tracer:
    """
    Create a root Tracer that logs every event at INFO under the `evt` key.

    Raises:
        MissingDependencyError: If `log` is None.
    """
    return Tracer(LogSink(log), fields, clock=clock)
