"""TransformSink — rewrite bytes on their way to another sink."""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

from bytestreams.core.ownership import borrow
from bytestreams.core.protocols import ByteSink, write_all

Transform = Callable[[bytes], bytes]


class TransformSink:
    """Apply *transform* to every write before forwarding it.

    The transform may change the length of the data; ``write`` reports the
    caller's byte count once the transformed bytes are fully accepted
    downstream.  ``flush`` passes straight through.

    Usage
    -----
    >>> shout = TransformSink(MemorySink(), bytes.upper)
    >>> shout.write(b"Hello, world!")
    13
    """

    def __init__(self, sink: ByteSink, transform: Transform) -> None:
        self._sink = sink
        self._transform = transform
        self._closed = False
        self._release = borrow(sink, self)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed TransformSink")

    def write(self, data: bytes | bytearray | memoryview) -> int:
        self._check_open()
        chunk = bytes(data)
        write_all(self._sink, self._transform(chunk))
        return len(chunk)

    def flush(self) -> None:
        self._check_open()
        self._sink.flush()

    def close(self) -> None:
        """Release the wrapped sink.  Later writes and flushes raise."""
        self._closed = True
        self._release()

    def __enter__(self) -> TransformSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
