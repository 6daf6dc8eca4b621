"""Capability protocols every byte stream implements.

A sink exposes ``write(data) -> int`` and ``flush()``; a source exposes
``readinto(buffer) -> int``.  They are structural protocols rather than
base classes: any object with the right methods plugs in, including the
standard library's binary file objects and ``io.BytesIO``.

Contract summary
----------------
* ``write`` either accepts every byte or raises ``WriteError``.  It never
  drops bytes silently.
* ``flush`` pushes buffering internal to the implementer downstream.  It
  is a no-op for unbuffered sinks and must not raise for them.
* ``readinto`` fills as much of ``buffer`` as data allows and returns the
  count.  Fewer bytes than requested signals end-of-data *for that call*;
  a drained source keeps returning ``0``.  Only genuine I/O failure raises.
"""

from __future__ import annotations

import enum
import os
from typing import Protocol, runtime_checkable

from bytestreams.core.errors import FlushError, WriteError

__all__ = [
    "ByteSink",
    "ByteSource",
    "SeekOrigin",
    "Seekable",
    "flush_sink",
    "write_all",
]


@runtime_checkable
class ByteSink(Protocol):
    """Destination capable of accepting bytes."""

    def write(self, data: bytes | bytearray | memoryview, /) -> int:
        """Transfer *data* and return the number of bytes accepted."""
        ...

    def flush(self) -> None:
        """Force buffered bytes toward the downstream sink."""
        ...


@runtime_checkable
class ByteSource(Protocol):
    """Origin capable of supplying bytes on demand."""

    def readinto(self, buffer: bytearray | memoryview, /) -> int:
        """Fill *buffer* as far as data allows and return the count."""
        ...


class SeekOrigin(enum.IntEnum):
    """Reference point for ``Seekable.seek``."""

    SET = os.SEEK_SET
    CUR = os.SEEK_CUR
    END = os.SEEK_END


@runtime_checkable
class Seekable(Protocol):
    """Random-access capability offered by some concrete streams.

    Nothing in the core relies on it.
    """

    def seek(self, offset: int, whence: int = SeekOrigin.SET, /) -> int:
        ...

    def tell(self) -> int:
        ...


def write_all(sink: ByteSink, data: bytes | bytearray | memoryview) -> int:
    """Write *data* to *sink*, raising ``WriteError`` on a short write.

    Foreign sinks (plain file objects, sockets wrapped in files) may return
    fewer bytes than handed to them or ``None`` for non-blocking streams.
    Decorators call this instead of ``sink.write`` so a short transfer can
    never go unnoticed.  ``OSError`` from a raw file object is raised as
    ``WriteError`` with nothing counted as written.
    """
    view = memoryview(data)
    try:
        written = sink.write(view)
    except OSError as exc:
        raise WriteError(f"write failed: {exc}") from exc
    if written is None or written < len(view):
        raise WriteError(
            f"sink accepted {written or 0} of {len(view)} bytes",
            written=written or 0,
        )
    return written


def flush_sink(sink: ByteSink) -> None:
    """Flush *sink*, wrapping foreign ``OSError`` failures in ``FlushError``."""
    try:
        sink.flush()
    except OSError as exc:
        raise FlushError(f"flush failed: {exc}") from exc
