"""
trace_event: emit Google Trace Event format events from a tree of tracers.

Usage:
    from trace_event import create_tracer

    tracer = create_tracer({"cat": ["app"]})
    req = tracer.child({"args": {"req_id": 42}})
    req.begin("handle")
    req.end("handle")

    with open("trace.json", "wb") as fp:
        tracer.sink.drain_to(fp)
"""

from .clock import IClock, MonotonicClock
from .composer import compose_event, normalize_category, resolve_defaults
from .errors import (
    MissingDependencyError,
    SinkClosedError,
    SinkOverflowError,
    TraceEventError,
)
from .logging_config import JSONFormatter, get_logger, setup_logging
from .models import (
    CallInput,
    Fields,
    Label,
    OutputMode,
    Phase,
    Stamp,
    TraceEvent,
    TracerOptions,
)
from .sink import IEventSink, LogSink, StreamSink, close_json_array
from .tracer import (
    ITracer,
    Tracer,
    TracingLogger,
    create_log_tracer,
    create_tracer,
    create_tracing_logger,
)

__all__ = [
    # Tracers
    "ITracer",
    "Tracer",
    "create_tracer",
    "create_log_tracer",
    "TracingLogger",
    "create_tracing_logger",
    # Sinks
    "IEventSink",
    "StreamSink",
    "LogSink",
    "close_json_array",
    # Models
    "TraceEvent",
    "Phase",
    "OutputMode",
    "Stamp",
    "Label",
    "Fields",
    "CallInput",
    "TracerOptions",
    # Composition
    "IClock",
    "MonotonicClock",
    "compose_event",
    "normalize_category",
    "resolve_defaults",
    # Errors
    "TraceEventError",
    "MissingDependencyError",
    "SinkClosedError",
    "SinkOverflowError",
    # Logging
    "JSONFormatter",
    "setup_logging",
    "get_logger",
]
