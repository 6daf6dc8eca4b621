"""bytestreams data models — Pydantic v2, frozen (immutable)."""

from bytestreams.models.transfer import TransferStats

__all__ = ["TransferStats"]
