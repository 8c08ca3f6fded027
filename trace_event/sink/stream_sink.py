"""StreamSink: the shared output channel of a tracer tree."""

import asyncio
import json
from collections import deque
from typing import Any, AsyncIterator, BinaryIO, Iterator, Protocol

from ..config import DEFAULT_HIGH_WATER_MARK, DEFAULT_MAX_BUFFERED
from ..errors import SinkClosedError, SinkOverflowError, TraceEventError
from ..logging_config import get_logger
from ..models import OutputMode, TraceEvent

logger = get_logger(__name__)

OPEN_ARRAY = b"["
EVENT_SEPARATOR = b",\n"


class IEventSink(Protocol):
    """Destination for composed trace events."""

    def emit(self, event: TraceEvent) -> None:
        """Deliver one event. Errors propagate to the caller."""
        ...


class StreamSink:
    """
    Push-based event channel read by a single consumer.

    In RECORD mode every event is queued as the dict itself. In TEXT mode
    events are serialised to JSON, suffixed with ",\\n" and queued as UTF-8
    bytes, with a one-time "[" chunk ahead of the first event. The array is
    never closed; see close_json_array().

    Emitting is synchronous and never waits for the consumer. Queued chunks
    are released through read(), iteration or async iteration.
    """

    def __init__(
        self,
        mode: OutputMode | str = OutputMode.TEXT,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        max_buffered: int | None = DEFAULT_MAX_BUFFERED,
    ):
        self._mode = OutputMode(mode)
        self._high_water_mark = high_water_mark
        self._max_buffered = max_buffered
        self._buffer: deque[Any] = deque()
        self._opened = False
        self._closed = False
        self._over_high_water = False
        self._data_ready = asyncio.Event()
        logger.debug("StreamSink created in %s mode", self._mode.value)

    @property
    def mode(self) -> OutputMode:
        return self._mode

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def buffered(self) -> int:
        """Number of chunks waiting to be read."""
        return len(self._buffer)

    @property
    def needs_drain(self) -> bool:
        """True while the buffer is at or above the high-water mark."""
        return len(self._buffer) >= self._high_water_mark

    def emit(self, event: TraceEvent) -> None:
        """Queue one event for the consumer."""
        if self._closed:
            raise SinkClosedError("cannot emit to a closed StreamSink")
        # The first TEXT event also queues the opening "["
        pending = 1 if self._mode is OutputMode.TEXT and not self._opened else 0
        if (
            self._max_buffered is not None
            and len(self._buffer) + pending >= self._max_buffered
        ):
            raise SinkOverflowError(
                f"StreamSink buffer full ({self._max_buffered} chunks unread)"
            )

        if self._mode is OutputMode.RECORD:
            self._push(event)
            return

        # Serialise before touching the buffer so a bad event leaves no trace
        chunk = json.dumps(event).encode("utf-8") + EVENT_SEPARATOR
        if not self._opened:
            self._push(OPEN_ARRAY)
            self._opened = True
        self._push(chunk)

    def _push(self, chunk: Any) -> None:
        self._buffer.append(chunk)
        self._data_ready.set()

        if not self._over_high_water and self.needs_drain:
            self._over_high_water = True
            logger.warning(
                "StreamSink reached high-water mark: %d chunks unread",
                len(self._buffer),
            )

    def read(self) -> Any | None:
        """Return the next queued chunk, or None if nothing is queued."""
        if not self._buffer:
            return None

        chunk = self._buffer.popleft()
        if self._over_high_water and not self.needs_drain:
            self._over_high_water = False
        return chunk

    def __iter__(self) -> Iterator[Any]:
        """Drain the chunks queued right now."""
        while self._buffer:
            yield self.read()

    async def __aiter__(self) -> AsyncIterator[Any]:
        """Yield chunks as they arrive until the sink is closed."""
        while True:
            while self._buffer:
                yield self.read()
            if self._closed:
                return
            self._data_ready.clear()
            await self._data_ready.wait()

    def drain_to(self, fp: BinaryIO) -> int:
        """Write every queued TEXT chunk to a binary file object."""
        if self._mode is not OutputMode.TEXT:
            raise TraceEventError("drain_to() requires a TEXT mode sink")

        written = 0
        for chunk in self:
            written += fp.write(chunk)
        return written

    def close(self) -> None:
        """End the stream. Queued chunks stay readable."""
        if self._closed:
            return
        self._closed = True
        self._data_ready.set()
        logger.debug("StreamSink closed with %d chunks unread", len(self._buffer))


def close_json_array(text: str | bytes) -> str:
    """
    Turn TEXT mode output into a strict JSON document.

    Strips the trailing comma after the last event and appends "]".
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")

    body = text.rstrip()
    if not body:
        return "[]"
    if body.endswith(","):
        body = body[:-1]
    return body + "]"
