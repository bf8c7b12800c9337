"""Display utilities for the state consistency check."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from parkr.features.state import ConsistencyReport


@final
class StateCheckDisplay:
    """Print issues and warnings found in the state file."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(self, report: ConsistencyReport, *, quiet: bool = False) -> None:
        if report.issues:
            self.console.print(f"[bold red]Issues ({len(report.issues)}):[/bold red]")
            for issue in report.issues:
                self.console.print(f"[red]  • {escape(issue)}[/red]")

        if quiet:
            return

        if report.warnings:
            self.console.print(f"[bold yellow]Warnings ({len(report.warnings)}):[/bold yellow]")
            for warning in report.warnings:
                self.console.print(f"[yellow]  • {escape(warning)}[/yellow]")

        if report.is_clean:
            self.console.print("[green]✓ State is consistent[/green]")
