"""Logger adapter that carries default trace event fields."""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..clock import IClock, MonotonicClock
from ..composer import compose_event, resolve_defaults
from ..config import EVENT_LOG_KEY
from ..errors import MissingDependencyError
from ..models import Phase


class TracingLogger(logging.LoggerAdapter):
    """
    LoggerAdapter with begin/instant/end trace event methods.

    Default event fields live in `evt_fields`. An `evt` entry passed in
    `extra` is moved into them instead of being logged as context, so
    `child(evt={...})` and `child(**{"evt": {...}})` are equivalent.
    """

    def __init__(
        self,
        logger: logging.Logger,
        extra: Mapping[str, Any] | None = None,
        evt: Mapping[str, Any] | None = None,
        *,
        clock: IClock | None = None,
        parent_evt: Mapping[str, Any] | None = None,
    ):
        context = dict(extra) if extra else {}
        carried = dict(context.pop(EVENT_LOG_KEY, None) or {})
        if evt:
            carried.update(evt)

        super().__init__(logger, context)
        self._clock = clock if clock is not None else MonotonicClock()
        self.evt_fields = MappingProxyType(resolve_defaults(parent_evt, carried))

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        """Attach adapter context as `context`, next to any per-call extra."""
        extra = dict(kwargs.get("extra") or {})
        if self.extra:
            extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def child(self, evt: Mapping[str, Any] | None = None, **extra: Any) -> "TracingLogger":
        """Create a child adapter with inherited context and event defaults."""
        return TracingLogger(
            self.logger,
            {**self.extra, **extra},
            evt,
            clock=self._clock,
            parent_evt=self.evt_fields,
        )

    def begin(self, fields: Any = None) -> None:
        self._log_event(Phase.BEGIN, fields)

    def instant(self, fields: Any = None) -> None:
        self._log_event(Phase.INSTANT, fields)

    def end(self, fields: Any = None) -> None:
        self._log_event(Phase.END, fields)

    def _log_event(self, phase: Phase, fields: Any) -> None:
        event = compose_event(self.evt_fields, phase, fields, self._clock)
        self.info(
            "%s %s", event.get("ph"), event.get("name", ""),
            extra={EVENT_LOG_KEY: event},
        )


def create_tracing_logger(
    log: logging.Logger | str | None,
    evt: Mapping[str, Any] | None = None,
    **extra: Any,
) -> TracingLogger:
    """
    Wrap a logger so it can emit trace events.

    Args:
        log: A Logger, or the name of one.
        evt: Default trace event fields.
        **extra: Context attached to every record.

    Raises:
        MissingDependencyError: If `log` is None.
    """
    if log is None:
        raise MissingDependencyError("could not find a logger to attach tracing to")
    if isinstance(log, str):
        log = logging.getLogger(log)
    return TracingLogger(log, extra, evt)
