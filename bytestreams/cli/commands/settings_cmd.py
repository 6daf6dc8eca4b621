"""``bytestreams config`` — show the effective settings."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from bytestreams.config import StreamSettings

console = Console()


def config_cmd() -> None:
    """Show settings after .env and BYTESTREAMS_* overrides are applied."""
    current = StreamSettings()
    table = Table(title="bytestreams settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Environment variable", style="dim")
    for name, value in current.model_dump().items():
        table.add_row(name, repr(value), f"BYTESTREAMS_{name.upper()}")
    console.print(table)
