"""PushbackSource — arbitrary-length unget for any source."""

from __future__ import annotations

import logging
from types import TracebackType

from bytestreams.core.ownership import borrow
from bytestreams.core.protocols import ByteSource

logger = logging.getLogger(__name__)


class PushbackSource:
    """Wrap a source and allow any amount of data to be pushed back.

    The pushed-back bytes need not match anything previously read, and
    nothing has to have been read first.  Pushed-back bytes are always
    returned before the wrapped source is consulted.

    Internally the bytes live on a stack stored in reverse, so the most
    recent ``unget`` comes out first while each ``unget`` keeps its own
    order: ungetting ``A`` then ``B`` reads back ``B + A``.
    """

    def __init__(self, source: ByteSource) -> None:
        self._source = source
        # Reversed: the next byte to deliver is the last element.
        self._stack = bytearray()
        self._closed = False
        self._release = borrow(source, self)

    @property
    def pending(self) -> int:
        """Number of pushed-back bytes not yet read."""
        return len(self._stack)

    @property
    def closed(self) -> bool:
        return self._closed

    def unget(self, data: bytes | bytearray | memoryview) -> None:
        """Push *data* back so the next read returns it first, in order."""
        chunk = bytes(data)
        self._stack += chunk[::-1]
        logger.debug("Pushed back %d bytes (%d pending)", len(chunk), len(self._stack))

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Drain pushed-back bytes, then read the rest from the wrapped source."""
        if self._closed:
            raise ValueError("I/O operation on closed PushbackSource")
        with memoryview(buffer) as raw:
            dst = raw.cast("B")
            given = 0
            if self._stack:
                size = len(self._stack)
                given = min(len(dst), size)
                dst[:given] = self._stack[size - given:][::-1]
                del self._stack[size - given:]
            if given < len(dst):
                given += self._source.readinto(dst[given:]) or 0
        return given

    def close(self) -> None:
        """Release the wrapped source.  Pending bytes are discarded."""
        if self._closed:
            return
        self._closed = True
        self._release()

    def __enter__(self) -> PushbackSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
