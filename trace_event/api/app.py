"""FastAPI application serving a trace stream."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..logging_config import get_logger
from ..sink import StreamSink
from ..tracer import Tracer
from .routes import create_trace_router

logger = get_logger(__name__)


def create_fastapi_app(tracer: Tracer) -> FastAPI:
    """Create a FastAPI app exposing `tracer` at GET /api/trace."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Trace API started")
        yield
        # Ends any open /api/trace response
        if isinstance(tracer.sink, StreamSink):
            tracer.sink.close()
        logger.info("Trace API stopped")

    fastapi_app = FastAPI(
        title="trace_event",
        description="Streams Trace Event format JSON",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(create_trace_router(tracer))
    return fastapi_app
