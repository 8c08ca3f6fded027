"""Pytest configuration and fixtures."""

import logging
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from trace_event.models import Stamp  # noqa: E402


class FakeClock:
    """Deterministic clock: ts advances by `step` on every read."""

    def __init__(self, start: int = 1000, step: int = 10, pid: int = 4242):
        self.ts = start
        self.step = step
        self.pid = pid

    def now(self) -> Stamp:
        stamp = Stamp(ts=self.ts, pid=self.pid, tid=self.pid)
        self.ts += self.step
        return stamp


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TRACE_EVENT_* env vars from leaking into tests."""
    for name in (
        "TRACE_EVENT_OUTPUT_MODE",
        "TRACE_EVENT_MAX_BUFFERED",
        "TRACE_EVENT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    """Create a deterministic clock."""
    return FakeClock()


@pytest.fixture
def text_tracer(clock):
    """Create a root tracer writing JSON text."""
    from trace_event import create_tracer

    return create_tracer(output_mode="text", clock=clock)


@pytest.fixture
def record_tracer(clock):
    """Create a root tracer writing dict records."""
    from trace_event import create_tracer

    return create_tracer(output_mode="record", clock=clock)


@pytest.fixture
def trace_log(caplog):
    """Logger whose INFO records are captured by caplog."""
    caplog.set_level(logging.INFO)
    return logging.getLogger("tests.trace")
