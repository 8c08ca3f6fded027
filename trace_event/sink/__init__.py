"""Sink module."""

from .log_sink import LogSink
from .stream_sink import IEventSink, StreamSink, close_json_array

__all__ = ["IEventSink", "StreamSink", "LogSink", "close_json_array"]
