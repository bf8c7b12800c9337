"""Display utilities for the report command."""

from __future__ import annotations

from datetime import datetime
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from parkr.features.prune import ReportSummary
from parkr.shared import format_age, format_size


@final
class ReportDisplay:
    """Render grabbed projects as a table with totals."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(
        self,
        summary: ReportSummary,
        *,
        quiet: bool = False,
        now: datetime | None = None,
    ) -> None:
        if quiet:
            return

        if not summary.projects:
            self.console.print("No projects currently checked out.")
            return

        table = Table(title="Grabbed projects")
        table.add_column("Project", style="bold")
        table.add_column("Size", justify="right")
        table.add_column("Modified")
        table.add_column("Parked")
        table.add_column("Status")

        for report in summary.projects:
            status_style = "green" if report.is_safe else "yellow"
            parked = "never" if report.never_parked else format_age(report.last_park_at, now)
            table.add_row(
                escape(report.name),
                format_size(report.local_size),
                format_age(report.last_modified, now),
                parked,
                f"[{status_style}]{report.status}[/{status_style}]",
            )

        self.console.print(table)
        self.console.print(f"\nTotal projects: {summary.total_projects}")
        self.console.print(f"Total local size: {format_size(summary.total_size)}")
        self.console.print(f"[green]Safe to delete: {summary.safe_to_delete}[/green]")
        self.console.print(f"Recoverable space: {format_size(summary.recoverable_space)}")
