"""Pump a source into a sink."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from bytestreams.config import settings
from bytestreams.core.protocols import ByteSink, ByteSource, write_all
from bytestreams.models.transfer import TransferStats

logger = logging.getLogger(__name__)


def copy_stream(
    source: ByteSource,
    sink: ByteSink,
    chunk_size: int | None = None,
) -> TransferStats:
    """Copy *source* into *sink* until a read comes back short.

    A short read is end-of-data for the source contract, so the copy stops
    after writing whatever that read delivered.  The sink is flushed once
    at the end; flush and write errors propagate.
    """
    size = settings.buffer_size if chunk_size is None else chunk_size
    if size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {size}")

    started = datetime.now(timezone.utc)
    buffer = bytearray(size)
    copied = reads = writes = 0
    with memoryview(buffer) as view:
        while True:
            count = source.readinto(view) or 0
            reads += 1
            if count:
                write_all(sink, view[:count])
                writes += 1
                copied += count
            if count < size:
                break
    sink.flush()

    stats = TransferStats(
        bytes_copied=copied,
        reads=reads,
        writes=writes,
        chunk_size=size,
        started_at=started,
        finished_at=datetime.now(timezone.utc),
    )
    logger.debug(
        "Copied %d bytes in %d reads / %d writes", copied, reads, writes
    )
    return stats
