"""OS-backed sinks and sources.

Modules
-------
stdio
    Borrowed binary file objects, including the standard streams.
files
    Owned file handles with optional append mode and seek/tell.
fd
    Raw POSIX descriptors; ``flush`` is ``fsync``.
pipe
    Child processes fed through stdin or drained from stdout.
mapped
    Read-only memory-mapped files.

Each endpoint satisfies the ``ByteSink`` or ``ByteSource`` protocol and
nothing more is required to plug it into the core decorators.
"""

from bytestreams.endpoints.fd import FdFileSink, FdSink
from bytestreams.endpoints.files import FileSink, FileSource
from bytestreams.endpoints.mapped import MmapSource
from bytestreams.endpoints.pipe import PipeSink, PipeSource
from bytestreams.endpoints.stdio import (
    StdioSink,
    StdioSource,
    stderr_sink,
    stdin_source,
    stdout_sink,
)

__all__ = [
    "FdSink",
    "FdFileSink",
    "FileSink",
    "FileSource",
    "MmapSource",
    "PipeSink",
    "PipeSource",
    "StdioSink",
    "StdioSource",
    "stdout_sink",
    "stderr_sink",
    "stdin_source",
]
