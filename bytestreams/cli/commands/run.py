"""``bytestreams run COMMAND`` — feed a stream into a subprocess.

Reads SRC (stdin by default) through a BufferedSource and writes it to the
child's standard input through a BufferedSink.  The child's own output is
inherited.  Exits with the child's exit status.
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from bytestreams.cli.commands._endpoints import open_source
from bytestreams.core.buffered import BufferedSink, BufferedSource
from bytestreams.core.copy import copy_stream
from bytestreams.core.errors import StreamError
from bytestreams.endpoints.pipe import PipeSink

console = Console(stderr=True)


def run_cmd(
    command: str = typer.Argument(..., help="Command line to run (no shell)."),
    src: str = typer.Option("-", "--input", "-i", help="Input file, or '-' for stdin."),
    buffer_size: Optional[int] = typer.Option(
        None, "--buffer-size", "-b", min=1, help="Buffer capacity in bytes."
    ),
) -> None:
    """Pipe SRC into COMMAND's standard input."""
    try:
        with ExitStack() as stack:
            source = stack.enter_context(
                BufferedSource(open_source(stack, src), buffer_size)
            )
            pipe = stack.enter_context(PipeSink(command))
            with BufferedSink(pipe, buffer_size) as sink:
                stats = copy_stream(source, sink, buffer_size)
    except FileNotFoundError as exc:
        console.print(f"[bold red]Command not found:[/bold red] {exc}")
        raise typer.Exit(code=127) from exc
    except (StreamError, OSError) as exc:
        console.print(f"[bold red]Pipe failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    status = pipe.returncode
    style = "green" if status == 0 else "red"
    console.print(
        f"[{style}]{escape(command)} exited with status {status}[/{style}] "
        f"({stats.bytes_copied} bytes fed)",
        highlight=False,
    )
    raise typer.Exit(code=status or 0)
