"""Borrow bookkeeping for decorator streams.

A decorator borrows the stream it wraps for its whole lifetime.  Only one
live decorator may hold a given stream; wrapping it a second time raises
``StreamBorrowedError`` at construction.  The borrow ends when the
decorator calls the returned release handle (on ``close``) or is garbage
collected, whichever comes first.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any

from bytestreams.core.errors import StreamBorrowedError

logger = logging.getLogger(__name__)

# id(stream) -> description of the decorator holding it
_borrowed: dict[int, str] = {}


def _describe(obj: Any) -> str:
    return f"{type(obj).__name__}@{id(obj):#x}"


def _release(key: int, holder: str) -> None:
    if _borrowed.get(key) == holder:
        del _borrowed[key]
        logger.debug("Released borrow held by %s", holder)


def borrow(stream: Any, owner: Any) -> weakref.finalize:
    """Record that *owner* wraps *stream* and return its release handle.

    The handle is a ``weakref.finalize``; calling it releases the borrow
    and later calls are no-ops.

    Raises
    ------
    StreamBorrowedError
        If another live decorator already wraps *stream*, or if *owner*
        tries to wrap itself.
    """
    if stream is owner:
        raise StreamBorrowedError(f"{_describe(owner)} cannot wrap itself")
    key = id(stream)
    holder = _borrowed.get(key)
    if holder is not None:
        raise StreamBorrowedError(
            f"{_describe(stream)} is already wrapped by {holder}"
        )
    description = _describe(owner)
    _borrowed[key] = description
    logger.debug("%s borrowed %s", description, _describe(stream))
    return weakref.finalize(owner, _release, key, description)


def is_borrowed(stream: Any) -> bool:
    """Return ``True`` if a live decorator currently wraps *stream*."""
    return id(stream) in _borrowed
