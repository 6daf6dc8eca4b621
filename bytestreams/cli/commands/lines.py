"""``bytestreams lines SRC`` — list the terminator-delimited records of a stream.

Each record is shown with its number and byte length.  The final row
states whether the stream ended cleanly between records or in the middle
of one.
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from bytestreams.cli.commands._endpoints import open_source
from bytestreams.config import settings
from bytestreams.core.buffered import BufferedSource
from bytestreams.core.errors import StreamError
from bytestreams.core.typed import read_until

console = Console(stderr=True)


def lines_cmd(
    src: str = typer.Argument(..., help="Source file, or '-' for stdin."),
    terminator: Optional[str] = typer.Option(
        None,
        "--terminator",
        "-t",
        help="Single-byte record terminator (default: BYTESTREAMS_LINE_TERMINATOR).",
    ),
    buffer_size: Optional[int] = typer.Option(
        None, "--buffer-size", "-b", min=1, help="Read buffer capacity in bytes."
    ),
) -> None:
    """Show every record of SRC with its length."""
    term = settings.terminator_byte if terminator is None else terminator.encode("latin-1")
    if len(term) != 1:
        console.print(f"[bold red]Terminator must be one byte:[/bold red] {terminator!r}")
        raise typer.Exit(code=2)

    table = Table(title=f"Records in {src}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Bytes", justify="right", style="green")
    table.add_column("Content")

    count = 0
    complete = True
    try:
        with ExitStack() as stack:
            source = stack.enter_context(
                BufferedSource(open_source(stack, src), buffer_size)
            )
            while True:
                record = read_until(source, term)
                if not record:
                    break
                complete = record.endswith(term)
                body = record[:-1] if complete else record
                count += 1
                table.add_row(
                    str(count),
                    str(len(body)),
                    Text(body.decode(settings.encoding, errors="replace")),
                )
    except (StreamError, OSError) as exc:
        console.print(f"[bold red]Read failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(table)
    if complete:
        console.print(f"[green]{count} records, stream ended between records.[/green]")
    else:
        console.print(f"[yellow]{count} records, stream ended mid-record.[/yellow]")
