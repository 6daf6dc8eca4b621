"""Shared test fixtures for bytestreams."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from bytestreams.core.errors import FlushError, ReadError, WriteError
from bytestreams.core.memory import MemorySink

# ---------------------------------------------------------------------------
# Fake streams
# ---------------------------------------------------------------------------


class RecordingSink:
    """A sink that keeps every write as a separate chunk and counts flushes.

    ``events`` interleaves ``("write", bytes)`` and ``("flush", None)`` in
    call order so tests can check exactly when data moved downstream.
    """

    def __init__(self) -> None:
        self.chunks: list[bytes] = []
        self.flushes = 0
        self.events: list[tuple[str, bytes | None]] = []

    def write(self, data) -> int:
        chunk = bytes(data)
        self.chunks.append(chunk)
        self.events.append(("write", chunk))
        return len(chunk)

    def flush(self) -> None:
        self.flushes += 1
        self.events.append(("flush", None))

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


class FailingSink:
    """A sink that accepts *accept* bytes in total, then raises ``WriteError``."""

    def __init__(self, accept: int = 0, flush_fails: bool = False) -> None:
        self._accept = accept
        self._flush_fails = flush_fails
        self.received = bytearray()
        self.flushes = 0

    def write(self, data) -> int:
        chunk = bytes(data)
        room = max(self._accept - len(self.received), 0)
        taken = chunk[:room]
        self.received += taken
        if len(taken) < len(chunk):
            raise WriteError("disk full", written=len(taken))
        return len(chunk)

    def flush(self) -> None:
        self.flushes += 1
        if self._flush_fails:
            raise FlushError("device error")


class ChunkedSource:
    """A source that hands out pre-cut chunks, one per read call.

    A read smaller than the next chunk takes a prefix and leaves the rest
    for the following call.  Once the chunks run out every read returns 0.
    ``reads`` counts calls to ``readinto``.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = [bytes(c) for c in chunks]
        self.reads = 0

    def readinto(self, buffer) -> int:
        self.reads += 1
        if not self._chunks:
            return 0
        dst = memoryview(buffer).cast("B")
        chunk = self._chunks[0]
        nbytes = min(len(dst), len(chunk))
        dst[:nbytes] = chunk[:nbytes]
        if nbytes == len(chunk):
            self._chunks.pop(0)
        else:
            self._chunks[0] = chunk[nbytes:]
        return nbytes


class ExplodingSource:
    """A source whose every read raises ``ReadError``."""

    def readinto(self, buffer) -> int:
        raise ReadError("device error")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for file-backed streams."""
    return tmp_path


@pytest.fixture
def memory_sink() -> MemorySink:
    """Provide an empty growable memory sink."""
    return MemorySink()


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Provide a sink that records every write and flush."""
    return RecordingSink()


@pytest.fixture
def make_failing_sink() -> Callable[..., FailingSink]:
    """Factory fixture: a sink that fails after accepting N bytes."""
    return FailingSink


@pytest.fixture
def make_chunked_source() -> Callable[[Iterable[bytes]], ChunkedSource]:
    """Factory fixture: a source that delivers the given chunks one per read."""
    return ChunkedSource


@pytest.fixture
def exploding_source() -> ExplodingSource:
    """Provide a source whose reads always fail."""
    return ExplodingSource()


@pytest.fixture
def control_bytes() -> bytes:
    """Fifteen bytes laid out as int8, int16, int32 and int64 fields."""
    return bytes(
        [0x01]
        + [0x02] * 2
        + [0x03] * 4
        + [0x04] * 8
    )
