"""bytestreams: uniform byte sinks and sources with buffering and pushback.

  - ByteSink / ByteSource capability protocols (io-compatible)
  - Memory, file, descriptor, pipe, mmap and standard-stream endpoints
  - BufferedSink / BufferedSource fixed-capacity buffering decorators
  - PushbackSource arbitrary-length unget
  - Typed helpers: fixed-size values, line and sentinel reads
"""

__version__ = "0.1.0"
__description__ = "Byte-stream sinks and sources with buffering and pushback decorators"

from bytestreams.core import (
    BufferedSink,
    BufferedSource,
    ByteSink,
    ByteSource,
    FlushError,
    MemorySink,
    MemorySource,
    PushbackSource,
    ReadError,
    SpanSink,
    StreamError,
    TransformSink,
    WriteError,
    copy_stream,
)
from bytestreams.core.typed import get_fixed, put_fixed, read_line

__all__ = [
    "ByteSink",
    "ByteSource",
    "BufferedSink",
    "BufferedSource",
    "PushbackSource",
    "TransformSink",
    "MemorySink",
    "MemorySource",
    "SpanSink",
    "StreamError",
    "WriteError",
    "FlushError",
    "ReadError",
    "copy_stream",
    "get_fixed",
    "put_fixed",
    "read_line",
    "__version__",
]
