"""Error taxonomy for byte streams.

End-of-data is *not* an error: a short read count signals it.  The classes
below cover genuine I/O failures from an underlying resource (disk full,
broken pipe, device error) and misuse of stream ownership.
"""

from __future__ import annotations


class StreamError(RuntimeError):
    """Base class for every stream failure."""


class WriteError(StreamError):
    """Raised when a sink cannot accept all of the bytes handed to it.

    Attributes
    ----------
    written:
        Number of bytes that did reach the sink before the failure.
    """

    def __init__(self, message: str, written: int = 0) -> None:
        super().__init__(message)
        self.written = written


class FlushError(StreamError):
    """Raised when pending bytes cannot be pushed downstream.

    Attributes
    ----------
    written:
        For a failure inside a buffered ``write``, how many of the
        caller's bytes the buffer had taken.  ``0`` otherwise.
    """

    def __init__(self, message: str, written: int = 0) -> None:
        super().__init__(message)
        self.written = written


class ReadError(StreamError):
    """Raised when a source fails for a reason other than end-of-data."""


class SeekError(StreamError):
    """Raised when repositioning a seekable stream fails."""


class StreamBorrowedError(StreamError):
    """Raised when a stream is wrapped by a second live decorator."""
