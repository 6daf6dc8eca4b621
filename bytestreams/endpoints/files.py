"""File-backed sinks and sources.

Both classes own their file handle: it is opened at construction and
released by ``close()`` (or leaving a ``with`` block) on every exit path.
They also offer the orthogonal ``Seekable`` capability.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from bytestreams.core.errors import SeekError
from bytestreams.core.protocols import SeekOrigin
from bytestreams.endpoints.stdio import StdioSink, StdioSource

logger = logging.getLogger(__name__)


class _FileEndpoint:
    """Owns one binary file handle and implements seek/tell/close."""

    _file: BinaryIO

    def __init__(self, path: str | os.PathLike[str], mode: str) -> None:
        self._path = Path(path)
        self._file = open(self._path, mode)  # noqa: SIM115
        logger.info("Opened %s (mode=%s)", self._path, mode)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def tell(self) -> int:
        try:
            return self._file.tell()
        except OSError as exc:
            raise SeekError(f"tell failed on {self._path}: {exc}") from exc

    def seek(self, offset: int, whence: int = SeekOrigin.SET) -> int:
        try:
            return self._file.seek(offset, SeekOrigin(whence))
        except (OSError, ValueError) as exc:
            raise SeekError(f"seek failed on {self._path}: {exc}") from exc

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self._file.close()
        finally:
            logger.info("Closed %s", self._path)

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class FileSink(_FileEndpoint):
    """Sink writing to a file, truncating it unless *append* is set.

    Closing flushes Python's buffer before releasing the handle.
    """

    def __init__(self, path: str | os.PathLike[str], append: bool = False) -> None:
        super().__init__(path, "ab" if append else "wb")
        self._out = StdioSink(self._file)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        return self._out.write(data)

    def flush(self) -> None:
        self._out.flush()


class FileSource(_FileEndpoint):
    """Source reading a file from the start."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(path, "rb")
        self._in = StdioSource(self._file)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        return self._in.readinto(buffer)
