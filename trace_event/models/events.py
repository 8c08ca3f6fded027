"""Trace event data models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# A composed event; plain dict so it serialises and compares directly
TraceEvent = dict[str, Any]


class Phase(str, Enum):
    """Phase markers for the "Async events" of the Trace Event format."""

    BEGIN = "b"
    INSTANT = "n"
    END = "e"


class OutputMode(str, Enum):
    """Framing discipline of a StreamSink."""

    TEXT = "text"  # growing JSON array body, UTF-8 bytes
    RECORD = "record"  # one dict per event, no serialisation


@dataclass(frozen=True)
class Stamp:
    """Timing and identity fields computed fresh for every event."""

    ts: int  # microseconds, monotonic
    pid: int
    tid: int

    def as_fields(self) -> TraceEvent:
        return {"ts": self.ts, "pid": self.pid, "tid": self.tid}


@dataclass(frozen=True)
class Label:
    """Call-site input given as a bare event name."""

    name: str


@dataclass(frozen=True)
class Fields:
    """Call-site input given as a bag of event fields."""

    values: dict[str, Any] = field(default_factory=dict)


CallInput = Union[Label, Fields]


def to_call_input(value: Any) -> CallInput | None:
    """
    Resolve raw call-site input into a tagged CallInput.

    A string becomes a Label, a mapping becomes Fields. Empty input
    (None, "" or {}) and anything that is neither a string nor a mapping
    resolve to None, contributing no keys. Field values are not inspected.
    """
    if isinstance(value, (Label, Fields)):
        return value
    if not value:
        return None
    if isinstance(value, str):
        return Label(value)
    if isinstance(value, Mapping):
        return Fields(dict(value))
    return None
