"""Standard-stream sinks and sources.

These wrap binary file objects the caller owns (``sys.stdout.buffer`` and
friends).  The handles are borrowed: ``close`` flushes but never closes
them.  The factories resolve ``sys.std*`` at call time because the
interpreter's standard streams may be replaced (test runners, redirection).
"""

from __future__ import annotations

import sys
from typing import BinaryIO

from bytestreams.core.errors import FlushError, ReadError, WriteError


class StdioSink:
    """Sink writing to a borrowed binary file object."""

    def __init__(self, file: BinaryIO) -> None:
        self._file = file

    @property
    def file(self) -> BinaryIO:
        return self._file

    def write(self, data: bytes | bytearray | memoryview) -> int:
        view = memoryview(data)
        try:
            written = self._file.write(view)
        except OSError as exc:
            raise WriteError(f"write failed: {exc}") from exc
        if written is None or written < view.nbytes:
            raise WriteError(
                f"short write: {written or 0} of {view.nbytes} bytes",
                written=written or 0,
            )
        return written

    def flush(self) -> None:
        try:
            self._file.flush()
        except OSError as exc:
            raise FlushError(f"flush failed: {exc}") from exc


class StdioSource:
    """Source reading from a borrowed binary file object."""

    def __init__(self, file: BinaryIO) -> None:
        self._file = file

    @property
    def file(self) -> BinaryIO:
        return self._file

    def readinto(self, buffer: bytearray | memoryview) -> int:
        try:
            count = self._file.readinto(buffer)
        except OSError as exc:
            raise ReadError(f"read failed: {exc}") from exc
        return count or 0


def _binary(stream: object) -> BinaryIO:
    # Text wrappers expose their byte stream as .buffer; replacements such
    # as io.BytesIO are already binary.
    return getattr(stream, "buffer", stream)  # type: ignore[return-value]


def stdout_sink() -> StdioSink:
    """Sink for the process's current standard output."""
    return StdioSink(_binary(sys.stdout))


def stderr_sink() -> StdioSink:
    """Sink for the process's current standard error."""
    return StdioSink(_binary(sys.stderr))


def stdin_source() -> StdioSource:
    """Source for the process's current standard input."""
    return StdioSource(_binary(sys.stdin))
