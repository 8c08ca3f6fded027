"""HTTP API for trace_event."""

from .app import create_fastapi_app
from .routes import create_trace_router

__all__ = ["create_fastapi_app", "create_trace_router"]
