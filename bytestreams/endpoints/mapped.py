"""Memory-mapped file source."""

from __future__ import annotations

import logging
import mmap
import os
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)


class MmapSource:
    """Source serving reads straight from a read-only map of a file.

    The whole file is mapped at construction; reads copy out of the map.
    Empty files cannot be mapped and are served as an empty source.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._pos = 0
        self._map: mmap.mmap | None = None
        with open(self._path, "rb") as f:
            size = os.fstat(f.fileno()).st_size
            if size:
                # The map keeps its own reference to the file.
                self._map = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)
        self._size = size
        logger.info("Mapped %s (%d bytes)", self._path, size)

    @property
    def size(self) -> int:
        return self._size

    @property
    def remaining(self) -> int:
        return self._size - self._pos

    def readinto(self, buffer: bytearray | memoryview) -> int:
        if self._map is None:
            return 0
        dst = memoryview(buffer).cast("B")
        nbytes = min(len(dst), self._size - self._pos)
        dst[:nbytes] = self._map[self._pos:self._pos + nbytes]
        self._pos += nbytes
        return nbytes

    def close(self) -> None:
        if self._map is not None:
            self._map.close()
            self._map = None

    def __enter__(self) -> MmapSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
