"""Tracer module."""

from .tracer import ITracer, Tracer, create_log_tracer, create_tracer
from .tracing_logger import TracingLogger, create_tracing_logger

__all__ = [
    "ITracer",
    "Tracer",
    "create_tracer",
    "create_log_tracer",
    "TracingLogger",
    "create_tracing_logger",
]
