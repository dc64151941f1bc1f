"""Rich terminal reporter."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from versioncheck.scanner.models import ScanResult

_TYPE_STYLE = {
    "major": "bold white on red",
    "minor": "bold black on yellow",
    "patch": "bold black on bright_cyan",
    "prerelease": "bold white on magenta",
    "build": "bold white on blue",
}


def _type_pill(kind: Optional[str]) -> Text:
    if not kind:
        return Text("-", style="dim")
    if kind.startswith("downgrade"):
        return Text(f" {kind.upper()} ", style="bold white on dark_orange")
    return Text(f" {kind.upper()} ", style=_TYPE_STYLE.get(kind, ""))


def render(result: ScanResult, console: Optional[Console] = None) -> None:
    """Print the result of a version check using Rich."""
    console = console or Console(stderr=True)
    console.print()

    if not result.changed:
        console.print("[dim]No version change detected.[/dim]")
        return

    table = Table(title="Version change", show_lines=False, title_style="bold", border_style="dim")
    table.add_column("Previous", style="magenta")
    table.add_column("Version", style="green")
    table.add_column("Type", justify="center")
    table.add_column("Commit", style="cyan")
    table.add_row(
        result.previous_version or "-",
        result.version or "-",
        _type_pill(result.type),
        result.commit[:7] if result.commit else "-",
    )
    console.print(table)
