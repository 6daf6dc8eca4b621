"""Subprocess pipe endpoints.

``PipeSink`` runs a command and writes to its standard input;
``PipeSource`` runs a command and reads its standard output.  Commands are
split with ``shlex`` and executed without a shell.  Each endpoint owns its
child: ``close`` closes the pipe and waits for the process to exit.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from types import TracebackType
from typing import BinaryIO

from bytestreams.endpoints.stdio import StdioSink, StdioSource

logger = logging.getLogger(__name__)

Command = str | Sequence[str]


def _argv(command: Command) -> list[str]:
    argv = shlex.split(command) if isinstance(command, str) else list(command)
    if not argv:
        raise ValueError("empty command")
    return argv


class _PipeEndpoint:
    """Owns one child process."""

    _proc: subprocess.Popen[bytes]
    _pipe: BinaryIO

    def __init__(self, command: Command, stream: str, **popen_kwargs) -> None:
        self._argv = _argv(command)
        popen_kwargs[stream] = subprocess.PIPE
        self._proc = subprocess.Popen(self._argv, **popen_kwargs)
        pipe = getattr(self._proc, stream)
        if pipe is None:
            self._proc.kill()
            self._proc.wait()
            raise RuntimeError(f"no {stream} pipe to {self._argv[0]}")
        self._pipe = pipe
        logger.info("Started %s (pid=%d)", self._argv[0], self._proc.pid)

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def returncode(self) -> int | None:
        """Exit status once the child has been waited for, else ``None``."""
        return self._proc.returncode

    def close(self) -> int:
        """Close the pipe, wait for the child and return its exit status."""
        if self._proc.returncode is not None:
            return self._proc.returncode
        try:
            if not self._pipe.closed:
                self._pipe.close()
        except BrokenPipeError:
            logger.warning("%s exited before reading all input", self._argv[0])
        finally:
            status = self._proc.wait()
        logger.info("%s exited with status %d", self._argv[0], status)
        return status

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class PipeSink(_PipeEndpoint):
    """Sink feeding a child process's standard input."""

    def __init__(self, command: Command, **popen_kwargs) -> None:
        super().__init__(command, "stdin", **popen_kwargs)
        self._out = StdioSink(self._pipe)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        return self._out.write(data)

    def flush(self) -> None:
        self._out.flush()


class PipeSource(_PipeEndpoint):
    """Source draining a child process's standard output."""

    def __init__(self, command: Command, **popen_kwargs) -> None:
        super().__init__(command, "stdout", **popen_kwargs)
        self._in = StdioSource(self._pipe)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        return self._in.readinto(buffer)
