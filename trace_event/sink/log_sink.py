"""LogSink: route trace events through a logging.Logger."""

import logging

from ..config import EVENT_LOG_KEY
from ..errors import MissingDependencyError
from ..models import TraceEvent


class LogSink:
    """Emits every event as an INFO record carrying it under the `evt` key."""

    def __init__(self, log: logging.Logger | None):
        if log is None:
            raise MissingDependencyError("could not find a logger for LogSink")
        self.log = log

    def emit(self, event: TraceEvent) -> None:
        """Log the event at INFO."""
        self.log.info(
            "%s %s", event.get("ph"), event.get("name", ""),
            extra={EVENT_LOG_KEY: event},
        )
