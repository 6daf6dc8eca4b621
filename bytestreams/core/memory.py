"""In-memory sinks and sources.

``MemorySink`` grows without bound, ``SpanSink`` writes into a fixed
caller-owned span, and ``MemorySource`` serves an immutable byte span.
They are the terminal streams used for in-process composition and tests.
"""

from __future__ import annotations

from bytestreams.core.errors import WriteError


class MemorySink:
    """Growable sink backed by a ``bytearray``."""

    def __init__(self) -> None:
        self._data = bytearray()

    @property
    def buffer(self) -> bytearray:
        """The live backing store.  Changes to it affect the sink."""
        return self._data

    def getvalue(self) -> bytes:
        """Return a copy of everything written so far."""
        return bytes(self._data)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        view = memoryview(data)
        self._data += view
        return view.nbytes

    def flush(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._data)


class SpanSink:
    """Bounded sink that fills a caller-provided mutable span.

    Bytes that fit are copied in.  When a write does not fit entirely the
    copied prefix stays in place and ``WriteError`` is raised with
    ``written`` set, so a short transfer is never silent.
    """

    def __init__(self, span: bytearray | memoryview) -> None:
        self._span = memoryview(span).cast("B")
        if self._span.readonly:
            raise ValueError("SpanSink needs a writable span")
        self._used = 0

    def unused(self) -> memoryview:
        """Return the free tail of the span."""
        return self._span[self._used:]

    @property
    def used(self) -> int:
        return self._used

    def write(self, data: bytes | bytearray | memoryview) -> int:
        view = memoryview(data).cast("B")
        nbytes = min(len(view), len(self._span) - self._used)
        self._span[self._used:self._used + nbytes] = view[:nbytes]
        self._used += nbytes
        if nbytes < len(view):
            raise WriteError(
                f"span full: stored {nbytes} of {len(view)} bytes",
                written=nbytes,
            )
        return nbytes

    def flush(self) -> None:
        pass


class MemorySource:
    """Source that reads from an immutable byte span."""

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not yet read."""
        return len(self._data) - self._pos

    def readinto(self, buffer: bytearray | memoryview) -> int:
        dst = memoryview(buffer).cast("B")
        nbytes = min(len(dst), self.remaining)
        dst[:nbytes] = self._data[self._pos:self._pos + nbytes]
        self._pos += nbytes
        return nbytes
