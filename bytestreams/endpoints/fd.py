"""POSIX file-descriptor sinks.

``FdSink`` writes to a descriptor it does not own; ``FdFileSink`` opens a
path with ``os.open`` and owns the resulting descriptor.  ``flush`` means
``fsync`` here: there is no user-space buffer to drain.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from types import TracebackType

from bytestreams.core.errors import FlushError, SeekError, WriteError
from bytestreams.core.protocols import SeekOrigin

logger = logging.getLogger(__name__)

# fsync is meaningless on pipes, sockets and terminals
_UNSYNCABLE = frozenset({errno.EINVAL, errno.ENOTSUP, errno.EROFS})

_FILE_MODE = 0o644


class FdSink:
    """Sink writing to a borrowed file descriptor.

    ``os.write`` may transfer fewer bytes than asked; ``write`` loops until
    everything is out, so callers never see a short count.
    """

    def __init__(self, fd: int) -> None:
        self._fd = fd

    @property
    def fd(self) -> int:
        return self._fd

    def write(self, data: bytes | bytearray | memoryview) -> int:
        view = memoryview(data).cast("B")
        total = 0
        while total < len(view):
            try:
                total += os.write(self._fd, view[total:])
            except OSError as exc:
                raise WriteError(
                    f"write to fd {self._fd} failed: {exc}", written=total
                ) from exc
        return total

    def flush(self) -> None:
        try:
            os.fsync(self._fd)
        except OSError as exc:
            if exc.errno in _UNSYNCABLE:
                return
            raise FlushError(f"fsync on fd {self._fd} failed: {exc}") from exc


class FdFileSink(FdSink):
    """Sink that opens *path* for writing and owns the descriptor.

    The file is created with mode ``0o644`` if missing and truncated unless
    *append* is set.  Closing syncs and closes the descriptor.
    """

    def __init__(self, path: str | os.PathLike[str], append: bool = False) -> None:
        flags = os.O_CREAT | os.O_WRONLY | (os.O_APPEND if append else os.O_TRUNC)
        self._path = Path(path)
        super().__init__(os.open(self._path, flags, _FILE_MODE))
        self._closed = False
        logger.info("Opened fd %d for %s (append=%s)", self._fd, self._path, append)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def tell(self) -> int:
        return self.seek(0, SeekOrigin.CUR)

    def seek(self, offset: int, whence: int = SeekOrigin.SET) -> int:
        try:
            return os.lseek(self._fd, offset, SeekOrigin(whence))
        except OSError as exc:
            raise SeekError(f"lseek on {self._path} failed: {exc}") from exc

    def close(self) -> None:
        """Sync and close the descriptor.  Sync failures are logged."""
        if self._closed:
            return
        self._closed = True
        try:
            self.flush()
        except FlushError as exc:
            logger.warning("FdFileSink: fsync failed during close: %s", exc)
        finally:
            os.close(self._fd)
            logger.info("Closed %s", self._path)

    def __enter__(self) -> FdFileSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
