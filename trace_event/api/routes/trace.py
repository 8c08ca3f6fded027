"""Trace streaming API routes."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from ...models import OutputMode
from ...sink import StreamSink
from ...tracer import Tracer


def create_trace_router(tracer: Tracer) -> APIRouter:
    """Create a router streaming the tracer's JSON array body."""
    router = APIRouter(prefix="/api", tags=["trace"])

    @router.get("/trace")
    async def stream_trace() -> StreamingResponse:
        """Stream queued and future events until the sink is closed."""
        sink = tracer.sink
        if not isinstance(sink, StreamSink) or sink.mode is not OutputMode.TEXT:
            raise HTTPException(
                status_code=409, detail="Tracer is not writing a JSON text stream"
            )
        return StreamingResponse(sink, media_type="application/json")

    return router
