"""Exceptions raised by trace_event."""


class TraceEventError(Exception):
    """Base class for trace_event errors."""


class MissingDependencyError(TraceEventError):
    """A sink strategy was selected without the collaborator it needs."""


class SinkClosedError(TraceEventError):
    """An event was emitted after the sink was closed."""


class SinkOverflowError(TraceEventError):
    """The sink buffer reached its limit because nobody is reading."""
