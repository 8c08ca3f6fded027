"""Library-level configuration and defaults."""

import os

# trace-viewer requires `cat` and `args` on every event
DEFAULT_CATEGORY = "default"

# Key under which log-backed sinks attach the event to a log record
EVENT_LOG_KEY = "evt"

DEFAULT_HIGH_WATER_MARK = 1024
DEFAULT_MAX_BUFFERED = 65536

OUTPUT_MODE_ENV = "TRACE_EVENT_OUTPUT_MODE"
MAX_BUFFERED_ENV = "TRACE_EVENT_MAX_BUFFERED"
LOG_LEVEL_ENV = "TRACE_EVENT_LOG_LEVEL"


def resolve_output_mode(env_value: str | None = None) -> str:
    """Resolve the output mode name, falling back to the env var, then "text"."""
    value = env_value if env_value is not None else os.getenv(OUTPUT_MODE_ENV)
    if not value:
        return "text"
    return value.strip().lower()


def resolve_buffer_limit(env_value: str | None = None) -> int | None:
    """
    Resolve the maximum number of buffered chunks.

    "0" or "none" disables the limit. Unset means DEFAULT_MAX_BUFFERED.
    """
    value = env_value if env_value is not None else os.getenv(MAX_BUFFERED_ENV)
    if value is None or value == "":
        return DEFAULT_MAX_BUFFERED

    if value.strip().lower() in ("0", "none"):
        return None
    return int(value)
