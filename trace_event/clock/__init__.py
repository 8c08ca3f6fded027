"""Clock module."""

from .clock import IClock, MonotonicClock, now

__all__ = ["IClock", "MonotonicClock", "now"]
