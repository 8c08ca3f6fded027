"""Data models for trace_event."""

from .events import (
    CallInput,
    Fields,
    Label,
    OutputMode,
    Phase,
    Stamp,
    TraceEvent,
    to_call_input,
)
from .options import TracerOptions

__all__ = [
    # Events
    "TraceEvent",
    "Phase",
    "Stamp",
    "Label",
    "Fields",
    "CallInput",
    "to_call_input",
    # Options
    "OutputMode",
    "TracerOptions",
]
