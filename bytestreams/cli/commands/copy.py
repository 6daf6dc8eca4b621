"""``bytestreams copy SRC DST`` — buffered copy between files and stdio."""

from __future__ import annotations

from contextlib import ExitStack
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from bytestreams.cli.commands._endpoints import open_sink, open_source
from bytestreams.config import settings
from bytestreams.core.buffered import BufferedSink, BufferedSource
from bytestreams.core.copy import copy_stream
from bytestreams.core.errors import StreamError

console = Console(stderr=True)


def copy_cmd(
    src: str = typer.Argument(..., help="Source file, or '-' for stdin."),
    dst: str = typer.Argument(..., help="Destination file, or '-' for stdout."),
    buffer_size: Optional[int] = typer.Option(
        None,
        "--buffer-size",
        "-b",
        min=1,
        help="Buffer capacity in bytes (default: BYTESTREAMS_BUFFER_SIZE).",
    ),
    append: Optional[bool] = typer.Option(
        None,
        "--append/--truncate",
        help="Append to DST instead of truncating it.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress the summary."),
) -> None:
    """Copy SRC to DST through a BufferedSource and a BufferedSink."""
    capacity = buffer_size or settings.buffer_size
    do_append = settings.file_append if append is None else append

    try:
        with ExitStack() as stack:
            source = stack.enter_context(
                BufferedSource(open_source(stack, src), capacity)
            )
            sink = stack.enter_context(
                BufferedSink(open_sink(stack, dst, do_append), capacity)
            )
            stats = copy_stream(source, sink, capacity)
    except (StreamError, OSError) as exc:
        console.print(f"[bold red]Copy failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    if quiet:
        return

    table = Table(title="Transfer", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Source", src)
    table.add_row("Destination", dst)
    table.add_row("Bytes", str(stats.bytes_copied))
    table.add_row("Buffer", str(stats.chunk_size))
    table.add_row("Reads / writes", f"{stats.reads} / {stats.writes}")
    table.add_row("Elapsed", f"{stats.elapsed_seconds:.3f}s")
    console.print(table)
