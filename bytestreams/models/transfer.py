"""Transfer accounting model returned by ``copy_stream``."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class TransferStats(BaseModel):
    """Summary of one source-to-sink copy."""

    model_config = ConfigDict(frozen=True)

    bytes_copied: int = Field(default=0, ge=0)
    reads: int = Field(default=0, ge=0)
    writes: int = Field(default=0, ge=0)
    chunk_size: int = Field(default=1, gt=0)
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    finished_at: datetime | None = None

    @property
    def elapsed_seconds(self) -> float:
        """Wall-clock duration, or ``0.0`` while unfinished."""
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()
