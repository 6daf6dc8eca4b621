"""Resolve CLI path arguments to endpoints.

``-`` stands for the process's standard input or output.
"""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path

from bytestreams.core.protocols import ByteSink, ByteSource
from bytestreams.endpoints.files import FileSink, FileSource
from bytestreams.endpoints.stdio import stdin_source, stdout_sink

STDIO = "-"


def open_source(stack: ExitStack, name: str) -> ByteSource:
    """Open *name* for reading; the stack closes it."""
    if name == STDIO:
        return stdin_source()
    return stack.enter_context(FileSource(Path(name)))


def open_sink(stack: ExitStack, name: str, append: bool) -> ByteSink:
    """Open *name* for writing; the stack closes it."""
    if name == STDIO:
        return stdout_sink()
    return stack.enter_context(FileSink(Path(name), append=append))
