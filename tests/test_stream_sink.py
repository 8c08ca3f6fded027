"""Tests for StreamSink."""

import asyncio
import io
import json
import logging

import pytest

from trace_event.errors import SinkClosedError, SinkOverflowError, TraceEventError
from trace_event.models import OutputMode
from trace_event.sink import StreamSink, close_json_array


def _event(name: str, ph: str = "n") -> dict:
    return {"ts": 1, "pid": 2, "tid": 2, "ph": ph, "name": name, "cat": "x", "args": {}}


class TestRecordMode:
    """Tests for RECORD mode."""

    def test_events_delivered_as_is(self):
        """Test that records are the composed dicts themselves."""
        sink = StreamSink(OutputMode.RECORD)
        ev = _event("a")
        sink.emit(ev)
        assert sink.read() is ev

    def test_no_open_bracket(self):
        """Test that RECORD mode never queues framing chunks."""
        sink = StreamSink("record")
        sink.emit(_event("a"))
        sink.emit(_event("b"))
        assert [chunk["name"] for chunk in sink] == ["a", "b"]

    def test_drain_to_requires_text(self):
        """Test that drain_to() refuses RECORD mode."""
        sink = StreamSink(OutputMode.RECORD)
        with pytest.raises(TraceEventError):
            sink.drain_to(io.BytesIO())


class TestTextMode:
    """Tests for TEXT mode framing."""

    def test_first_chunk_is_open_bracket(self):
        """Test that "[" precedes the first event."""
        sink = StreamSink()
        sink.emit(_event("a"))
        assert sink.read() == b"["

    def test_event_chunk_format(self):
        """Test that each event is JSON followed by ",\\n"."""
        sink = StreamSink()
        sink.emit(_event("a"))
        sink.read()
        chunk = sink.read()
        assert chunk.endswith(b",\n")
        assert json.loads(chunk[:-2].decode("utf-8")) == _event("a")

    def test_open_bracket_only_once(self):
        """Test that later events are not preceded by another "["."""
        sink = StreamSink()
        for name in ("a", "b", "c"):
            sink.emit(_event(name))
        chunks = list(sink)
        assert chunks.count(b"[") == 1
        assert len(chunks) == 4

    def test_nothing_before_first_event(self):
        """Test that an unused sink has nothing to read."""
        sink = StreamSink()
        assert sink.read() is None
        assert sink.buffered == 0

    def test_concatenation_is_valid_json_array(self):
        """Test that the stream plus closing yields a JSON array."""
        sink = StreamSink()
        events = [_event(str(i)) for i in range(5)]
        for ev in events:
            sink.emit(ev)
        text = b"".join(sink)
        assert json.loads(close_json_array(text)) == events

    def test_consumer_joining_late(self):
        """Test that events emitted before reading starts are kept in order."""
        sink = StreamSink()
        sink.emit(_event("early"))
        first = [sink.read(), sink.read()]
        sink.emit(_event("late"))
        text = b"".join(first) + b"".join(sink)
        names = [ev["name"] for ev in json.loads(close_json_array(text))]
        assert names == ["early", "late"]

    def test_unserialisable_event_leaves_buffer_untouched(self):
        """Test that a serialisation error queues nothing."""
        sink = StreamSink()
        with pytest.raises(TypeError):
            sink.emit({"args": object()})
        assert sink.buffered == 0
        sink.emit(_event("a"))
        assert sink.read() == b"["

    def test_utf8_output(self):
        """Test that non-ASCII names are UTF-8 JSON."""
        sink = StreamSink()
        sink.emit(_event("héllo"))
        sink.read()
        assert json.loads(sink.read()[:-2].decode("utf-8"))["name"] == "héllo"

    def test_drain_to(self):
        """Test writing queued chunks to a file object."""
        sink = StreamSink()
        sink.emit(_event("a"))
        fp = io.BytesIO()
        written = sink.drain_to(fp)
        assert written == len(fp.getvalue())
        assert fp.getvalue().startswith(b"[{")
        assert sink.buffered == 0


class TestCloseJsonArray:
    """Tests for close_json_array()."""

    def test_empty_output(self):
        """Test that no output becomes an empty array."""
        assert close_json_array("") == "[]"

    def test_bracket_only(self):
        """Test that a lone "[" becomes an empty array."""
        assert close_json_array(b"[") == "[]"

    def test_trailing_comma_stripped(self):
        """Test that the trailing comma is removed."""
        assert close_json_array('[{"a": 1},\n') == '[{"a": 1}]'


class TestBackpressure:
    """Tests for buffering limits."""

    def test_needs_drain_at_high_water_mark(self):
        """Test that needs_drain follows the buffer size."""
        sink = StreamSink(OutputMode.RECORD, high_water_mark=2)
        sink.emit(_event("a"))
        assert not sink.needs_drain
        sink.emit(_event("b"))
        assert sink.needs_drain
        sink.read()
        assert not sink.needs_drain

    def test_high_water_warning_logged_once_per_crossing(self, caplog):
        """Test the warning when the high-water mark is crossed."""
        caplog.set_level(logging.WARNING, logger="trace_event.sink.stream_sink")
        sink = StreamSink(OutputMode.RECORD, high_water_mark=1)
        sink.emit(_event("a"))
        sink.emit(_event("b"))
        warnings = [r for r in caplog.records if "high-water" in r.getMessage()]
        assert len(warnings) == 1

    def test_overflow_raises(self):
        """Test that emitting into a full buffer fails."""
        sink = StreamSink(OutputMode.RECORD, max_buffered=2)
        sink.emit(_event("a"))
        sink.emit(_event("b"))
        with pytest.raises(SinkOverflowError):
            sink.emit(_event("c"))

    def test_text_limit_counts_open_bracket(self):
        """Test that the opening "[" counts toward max_buffered."""
        sink = StreamSink(OutputMode.TEXT, max_buffered=2)
        sink.emit(_event("a"))
        assert sink.buffered == 2
        with pytest.raises(SinkOverflowError):
            sink.emit(_event("b"))

    def test_text_limit_of_one_rejects_first_event(self):
        """Test that a one-chunk limit cannot hold "[" plus an event."""
        sink = StreamSink(OutputMode.TEXT, max_buffered=1)
        with pytest.raises(SinkOverflowError):
            sink.emit(_event("a"))
        assert sink.buffered == 0

    def test_reading_frees_space(self):
        """Test that reading makes room for new events."""
        sink = StreamSink(OutputMode.RECORD, max_buffered=1)
        sink.emit(_event("a"))
        sink.read()
        sink.emit(_event("b"))
        assert sink.read()["name"] == "b"

    def test_unbounded(self):
        """Test that max_buffered=None disables the limit."""
        sink = StreamSink(OutputMode.RECORD, high_water_mark=10**6, max_buffered=None)
        for i in range(1000):
            sink.emit(_event(str(i)))
        assert sink.buffered == 1000


class TestLifecycle:
    """Tests for closing and async consumption."""

    def test_emit_after_close_raises(self):
        """Test that a closed sink rejects events."""
        sink = StreamSink()
        sink.close()
        with pytest.raises(SinkClosedError):
            sink.emit(_event("a"))

    def test_queued_chunks_readable_after_close(self):
        """Test that closing keeps queued chunks."""
        sink = StreamSink(OutputMode.RECORD)
        sink.emit(_event("a"))
        sink.close()
        assert sink.closed
        assert sink.read()["name"] == "a"

    def test_close_is_idempotent(self):
        """Test closing twice."""
        sink = StreamSink()
        sink.close()
        sink.close()
        assert sink.closed

    @pytest.mark.asyncio
    async def test_async_iteration_waits_for_events(self):
        """Test that async iteration follows the stream until close."""
        sink = StreamSink(OutputMode.RECORD)
        received = []

        async def consume():
            async for chunk in sink:
                received.append(chunk["name"])

        task = asyncio.create_task(consume())
        await asyncio.sleep(0)
        sink.emit(_event("a"))
        await asyncio.sleep(0)
        sink.emit(_event("b"))
        sink.close()
        await asyncio.wait_for(task, timeout=1)

        assert received == ["a", "b"]

    @pytest.mark.asyncio
    async def test_async_iteration_of_closed_sink(self):
        """Test that a closed sink yields its queue and stops."""
        sink = StreamSink()
        sink.emit(_event("a"))
        sink.close()
        chunks = [chunk async for chunk in sink]
        assert chunks[0] == b"["
        assert len(chunks) == 2
