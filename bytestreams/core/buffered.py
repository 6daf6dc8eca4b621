"""Buffering decorators — BufferedSink and BufferedSource.

Both own a fixed-capacity ``bytearray`` split into a *filled* region of
valid bytes and a *free* region (``filled + free == capacity`` at all
times).  The buffer never grows: capacity is a hard ceiling.

``BufferedSink`` coalesces small writes and drains to the wrapped sink
whenever the buffer fills up.  ``BufferedSource`` over-reads from the
wrapped source and serves callers from its window.  Once the wrapped
source under-fills a refill request, the source latches end-of-data and
never asks the wrapped source for more.  That policy makes it unsuitable
for interactive or bursty sources such as terminals and pipes that pause
between writes; such sources should be read directly.
"""

from __future__ import annotations

import logging
from types import TracebackType

from bytestreams.config import settings
from bytestreams.core.errors import FlushError, WriteError
from bytestreams.core.ownership import borrow
from bytestreams.core.protocols import ByteSink, ByteSource, flush_sink, write_all

logger = logging.getLogger(__name__)


def _resolve_capacity(capacity: int | None) -> int:
    if capacity is None:
        capacity = settings.buffer_size
    if capacity < 1:
        raise ValueError(f"buffer capacity must be at least 1, got {capacity}")
    return capacity


class BufferedSink:
    """Wrap a sink and buffer output to it.

    ``write`` never loses bytes: it either buffers them or drains through
    to the wrapped sink.  A write larger than the capacity triggers as many
    flush cycles as needed instead of growing the buffer.

    Closing (directly, via ``with``, or on garbage collection) performs a
    best-effort flush: failures on that path are logged and swallowed.
    Call ``flush()`` explicitly to have them raised.

    Parameters
    ----------
    sink:
        The stream to write to.  It is borrowed, not owned, and must
        outlive this decorator.
    capacity:
        Buffer size in bytes.  Defaults to ``settings.buffer_size``.
    """

    def __init__(self, sink: ByteSink, capacity: int | None = None) -> None:
        self._capacity = _resolve_capacity(capacity)
        self._sink = sink
        self._buffer = bytearray(self._capacity)
        self._filled = 0
        self._closed = False
        self._release = borrow(sink, self)

    # ------------------------------------------------------------------
    # Buffer bookkeeping
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def filled(self) -> int:
        """Bytes waiting in the buffer."""
        return self._filled

    @property
    def free(self) -> int:
        """Bytes that can be buffered before the next flush."""
        return self._capacity - self._filled

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed BufferedSink")

    def _discard_front(self, count: int) -> None:
        remaining = self._filled - count
        self._buffer[:remaining] = self._buffer[count:self._filled]
        self._filled = remaining

    def _drain(self) -> None:
        """Write buffered bytes downstream, clear the buffer, flush the sink."""
        if self._filled:
            logger.debug("Draining %d buffered bytes", self._filled)
            with memoryview(self._buffer) as view:
                try:
                    write_all(self._sink, view[:self._filled])
                except WriteError as exc:
                    # Keep only what the sink did not take.
                    self._discard_front(min(exc.written, self._filled))
                    raise
            self._filled = 0
        flush_sink(self._sink)

    # ------------------------------------------------------------------
    # Sink capability
    # ------------------------------------------------------------------

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Buffer *data*, flushing each time the buffer fills.

        Returns the full length of *data*.  If draining fails part-way the
        ``WriteError`` or ``FlushError`` is re-raised with ``written`` set
        to how many bytes of *data* the buffer took, so the caller can
        resume from there.
        """
        self._check_open()
        with memoryview(data) as raw:
            view = raw.cast("B")
            total = len(view)
            available = self._capacity - self._filled
            while len(view) > available:
                self._buffer[self._filled:self._capacity] = view[:available]
                self._filled = self._capacity
                try:
                    self._drain()
                except (WriteError, FlushError) as exc:
                    taken = total - len(view) + available
                    raise type(exc)(str(exc), written=taken) from exc
                view = view[available:]
                available = self._capacity - self._filled
            self._buffer[self._filled:self._filled + len(view)] = view
            self._filled += len(view)
        return total

    def flush(self) -> None:
        """Copy buffered bytes to the wrapped sink and flush it.

        Errors from the wrapped sink propagate.
        """
        self._check_open()
        self._drain()

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Flush best-effort and release the wrapped sink.

        Flush errors are logged and swallowed so teardown cannot fail.
        """
        if self._closed:
            return
        try:
            self._drain()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "BufferedSink: dropped flush failure during close: %s", exc
            )
        finally:
            self._closed = True
            self._release()

    def __enter__(self) -> BufferedSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        # Partially constructed instances have nothing to flush.
        if not getattr(self, "_closed", True):
            self.close()


class BufferedSource:
    """Wrap a source and read from it in capacity-sized chunks.

    Reads are served from the internal window; the wrapped source is only
    consulted when the window is empty.  A caller asking for fewer bytes
    than are buffered gets them without any further read downstream.

    When a refill comes back short the source latches end-of-data: the
    bytes from that refill are still delivered, after which every read
    returns ``0`` and the wrapped source is never read again.

    Parameters
    ----------
    source:
        The stream to read from.  It is borrowed, not owned, and must
        outlive this decorator.
    capacity:
        Buffer size in bytes.  Defaults to ``settings.buffer_size``.
    """

    def __init__(self, source: ByteSource, capacity: int | None = None) -> None:
        self._capacity = _resolve_capacity(capacity)
        self._source = source
        self._buffer = bytearray(self._capacity)
        # Current window is self._buffer[self._start:self._end]
        self._start = 0
        self._end = 0
        self._eof = False
        self._closed = False
        self._release = borrow(source, self)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def buffered(self) -> int:
        """Bytes in the current window, not yet handed to a caller."""
        return self._end - self._start

    @property
    def at_eof(self) -> bool:
        """``True`` once the wrapped source has under-filled a refill."""
        return self._eof

    @property
    def closed(self) -> bool:
        return self._closed

    def _refill(self) -> None:
        with memoryview(self._buffer) as window:
            count = self._source.readinto(window) or 0
        self._start = 0
        self._end = count
        if count < self._capacity:
            self._eof = True
            logger.debug(
                "End-of-data latched after %d/%d-byte refill",
                count,
                self._capacity,
            )

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Fill *buffer* from the window, refilling it as needed."""
        if self._closed:
            raise ValueError("I/O operation on closed BufferedSource")
        if self._eof and self._start == self._end:
            return 0
        delivered = 0
        with memoryview(buffer) as raw:
            dst = raw.cast("B")
            wanted = len(dst)
            while delivered < wanted:
                if self._start == self._end:
                    if self._eof:
                        break
                    self._refill()
                nbytes = min(wanted - delivered, self._end - self._start)
                dst[delivered:delivered + nbytes] = (
                    self._buffer[self._start:self._start + nbytes]
                )
                self._start += nbytes
                delivered += nbytes
                if self._eof:
                    break
        return delivered

    def close(self) -> None:
        """Release the wrapped source.  Buffered bytes are discarded."""
        if self._closed:
            return
        self._closed = True
        self._release()

    def __enter__(self) -> BufferedSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
