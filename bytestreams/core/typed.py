"""Typed transfer helpers layered on the sink/source capabilities.

Fixed-size values travel as their raw bit pattern in host byte order.  A
value is described by a ``struct`` format (``"i"``, ``"Q"``, ``"d"``,
``"hh"``...) or a pre-compiled ``struct.Struct``; formats without a byte
order prefix are read with ``"="`` (native order, standard sizes, no
alignment padding).

Reads are all-or-nothing: ``get_fixed`` returns ``None`` instead of a
partially filled value, and ``read_line`` returns ``None`` only when not
a single byte could be obtained.
"""

from __future__ import annotations

import struct
from typing import Any

from bytestreams.config import settings
from bytestreams.core.protocols import ByteSink, ByteSource, write_all

__all__ = [
    "INT8",
    "UINT8",
    "INT16",
    "UINT16",
    "INT32",
    "UINT32",
    "INT64",
    "UINT64",
    "FLOAT32",
    "FLOAT64",
    "fixed_struct",
    "put_fixed",
    "get_fixed",
    "get_byte",
    "get_char",
    "read_bytes",
    "read_exact",
    "read_line",
    "read_until",
    "ignore_bytes",
    "put_bytes",
    "put_char",
    "put_line",
    "print_to",
]

INT8 = "b"
UINT8 = "B"
INT16 = "h"
UINT16 = "H"
INT32 = "i"
UINT32 = "I"
INT64 = "q"
UINT64 = "Q"
FLOAT32 = "f"
FLOAT64 = "d"

_BYTE_ORDER_PREFIXES = "@=<>!"
_struct_cache: dict[str, struct.Struct] = {}

Format = str | struct.Struct


def fixed_struct(fmt: Format) -> struct.Struct:
    """Return the compiled ``struct.Struct`` for *fmt*.

    Bare formats get the ``"="`` prefix so no alignment padding sneaks in.
    """
    if isinstance(fmt, struct.Struct):
        return fmt
    compiled = _struct_cache.get(fmt)
    if compiled is None:
        layout = fmt if fmt[:1] in _BYTE_ORDER_PREFIXES else "=" + fmt
        compiled = _struct_cache[fmt] = struct.Struct(layout)
    return compiled


# ---------------------------------------------------------------------------
# Fixed-size values
# ---------------------------------------------------------------------------


def put_fixed(sink: ByteSink, fmt: Format, *values: Any) -> int:
    """Write *values* packed according to *fmt*.  Returns the byte count."""
    return write_all(sink, fixed_struct(fmt).pack(*values))


def get_fixed(source: ByteSource, fmt: Format) -> Any | None:
    """Read one value (or record) described by *fmt*.

    Issues a single read of exactly the format's size.  If fewer bytes come
    back the value is reported missing with ``None``; the short bytes are
    consumed regardless.  Single-field formats return the bare value,
    compound formats a tuple.
    """
    compiled = fixed_struct(fmt)
    buffer = bytearray(compiled.size)
    if source.readinto(buffer) != compiled.size:
        return None
    values = compiled.unpack(buffer)
    return values[0] if len(values) == 1 else values


def get_byte(source: ByteSource) -> int | None:
    """Read a single byte as an integer, or ``None`` at end-of-data."""
    return get_fixed(source, UINT8)


def get_char(source: ByteSource) -> bytes | None:
    """Read a single byte as a length-1 ``bytes``, or ``None``."""
    return get_fixed(source, "c")


# ---------------------------------------------------------------------------
# Byte runs and delimited reads
# ---------------------------------------------------------------------------


def read_bytes(source: ByteSource, size: int) -> bytes:
    """Issue one read of up to *size* bytes and return what arrived."""
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    buffer = bytearray(size)
    count = source.readinto(buffer) or 0
    del buffer[count:]
    return bytes(buffer)


def read_exact(source: ByteSource, size: int) -> bytes | None:
    """Read exactly *size* bytes in one request, or return ``None``."""
    data = read_bytes(source, size)
    return data if len(data) == size else None


def read_line(source: ByteSource, terminator: bytes | None = None) -> bytes | None:
    """Read bytes up to *terminator* (excluded from the result).

    Returns
    -------
    bytes
        The line.  If end-of-data arrives after at least one byte and
        before a terminator, the partial line is returned.  An empty line
        (terminator read first) is ``b""``.
    None
        Only when no byte at all could be read: the stream ended cleanly
        between records.
    """
    nl = _single_byte(terminator)
    byte = get_byte(source)
    if byte is None:
        return None
    line = bytearray()
    while byte != nl:
        line.append(byte)
        byte = get_byte(source)
        if byte is None:
            break
    return bytes(line)


def read_until(source: ByteSource, sentinel: bytes | int) -> bytes:
    """Read up to and including *sentinel*, or until end-of-data."""
    stop = sentinel if isinstance(sentinel, int) else _single_byte(sentinel)
    data = bytearray()
    while True:
        byte = get_byte(source)
        if byte is None:
            return bytes(data)
        data.append(byte)
        if byte == stop:
            return bytes(data)


def ignore_bytes(source: ByteSource, count: int) -> int:
    """Discard up to *count* bytes.  Returns how many were skipped."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    skipped = 0
    while skipped < count:
        if get_byte(source) is None:
            break
        skipped += 1
    return skipped


def _single_byte(terminator: bytes | None) -> int:
    value = settings.terminator_byte if terminator is None else terminator
    if len(value) != 1:
        raise ValueError(f"terminator must be a single byte, got {value!r}")
    return value[0]


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def _as_bytes(data: str | bytes | bytearray | memoryview) -> bytes | bytearray | memoryview:
    if isinstance(data, str):
        return data.encode(settings.encoding)
    return data


def put_bytes(sink: ByteSink, data: str | bytes | bytearray | memoryview) -> int:
    """Write a byte string (``str`` is encoded with ``settings.encoding``)."""
    return write_all(sink, _as_bytes(data))


def put_char(sink: ByteSink, char: str | bytes | int) -> int:
    """Write a single character or byte value."""
    if isinstance(char, int):
        char = bytes((char,))
    return put_bytes(sink, char)


def put_line(
    sink: ByteSink,
    data: str | bytes | bytearray | memoryview,
    terminator: bytes | None = None,
) -> int:
    """Write *data* followed by the line terminator."""
    nl = settings.terminator_byte if terminator is None else terminator
    return put_bytes(sink, data) + write_all(sink, nl)


def print_to(sink: ByteSink, fmt: str, *args: Any, **kwargs: Any) -> int:
    """``str.format`` *fmt* with the arguments and write the result."""
    return put_bytes(sink, fmt.format(*args, **kwargs))
