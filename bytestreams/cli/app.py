"""Main Typer application — imports and registers all CLI commands.

Entry point: ``bytestreams`` (configured via pyproject.toml scripts).

Commands: copy, lines, run, config.
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from bytestreams.cli.commands.copy import copy_cmd
from bytestreams.cli.commands.lines import lines_cmd
from bytestreams.cli.commands.run import run_cmd
from bytestreams.cli.commands.settings_cmd import config_cmd
from bytestreams.config import settings

app = typer.Typer(
    name="bytestreams",
    help="bytestreams: buffered byte sinks and sources for files, pipes and stdio.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="copy", help="Copy a file or stdin through buffered streams.")(copy_cmd)
app.command(name="lines", help="List the terminator-delimited records of a stream.")(lines_cmd)
app.command(name="run", help="Pipe a stream into a subprocess.")(run_cmd)
app.command(name="config", help="Show the effective settings.")(config_cmd)


def configure_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: BYTESTREAMS_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any subcommand runs."""
    configure_logging(log_level or settings.log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
