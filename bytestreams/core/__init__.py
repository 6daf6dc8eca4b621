"""Stream core — capability protocols, memory streams and decorators.

Callers write through decorators into terminal sinks and read through
decorators from terminal sources.  Decorators borrow the stream they wrap
and compose freely, e.g. ``BufferedSink(TransformSink(MemorySink(), f))``.
"""

from bytestreams.core.buffered import BufferedSink, BufferedSource
from bytestreams.core.copy import copy_stream
from bytestreams.core.errors import (
    FlushError,
    ReadError,
    SeekError,
    StreamBorrowedError,
    StreamError,
    WriteError,
)
from bytestreams.core.memory import MemorySink, MemorySource, SpanSink
from bytestreams.core.protocols import ByteSink, ByteSource, Seekable, SeekOrigin
from bytestreams.core.pushback import PushbackSource
from bytestreams.core.transform import TransformSink

__all__ = [
    # protocols
    "ByteSink",
    "ByteSource",
    "Seekable",
    "SeekOrigin",
    # errors
    "StreamError",
    "WriteError",
    "FlushError",
    "ReadError",
    "SeekError",
    "StreamBorrowedError",
    # terminal streams
    "MemorySink",
    "MemorySource",
    "SpanSink",
    # decorators
    "BufferedSink",
    "BufferedSource",
    "PushbackSource",
    "TransformSink",
    # helpers
    "copy_stream",
]
