"""Clock/identity provider for trace events."""

import os
import time
from typing import Protocol

from ..models import Stamp


class IClock(Protocol):
    """Source of timing and identity fields."""

    def now(self) -> Stamp:
        """Return a fresh Stamp."""
        ...


class MonotonicClock:
    """Monotonic microsecond clock stamped with the current process id."""

    def now(self) -> Stamp:
        """Return ts in microseconds and pid/tid of this process."""
        ts = time.perf_counter_ns() // 1000
        pid = os.getpid()
        # No meaningful thread id at this level; tid mirrors pid
        return Stamp(ts=ts, pid=pid, tid=pid)


_default_clock = MonotonicClock()


def now() -> Stamp:
    """Read the default clock."""
    return _default_clock.now()
