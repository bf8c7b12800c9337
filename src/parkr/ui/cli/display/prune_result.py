"""src/parkr/ui/cli/display/prune_result.py
What: Render dry-run plans, deletion progress and prune outcomes.
Why: Keep prune console output in one place so commands stay thin.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.markup import escape

from parkr.features.prune import (
    ExecutionResult,
    FailureKind,
    ProjectReport,
    PruneCandidate,
    SelectionResult,
)
from parkr.shared import format_size


@final
class PruneResultDisplay:
    """Handles prune output in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_warnings(self, selection: SelectionResult) -> None:
        for warning in selection.warnings:
            self.console.print(f"[bold yellow]WARNING: {escape(warning)}[/bold yellow]\n")

    def show_no_candidates(self, *, forced: bool) -> None:
        if forced:
            self.console.print("No projects currently checked out.")
            return
        self.console.print("No safe candidates available for pruning.")
        self.console.print(
            "All grabbed projects have uncommitted changes or have never been parked."
        )

    def show_dry_run(self, selection: SelectionResult) -> None:
        """Print the automatic selection without deleting anything."""

        self.console.print("[bold cyan]DRY-RUN:[/bold cyan] The following projects would be deleted:\n")
        for index, candidate in enumerate(selection.selected, start=1):
            self.console.print(
                f"{index}. {escape(candidate.name)} ({format_size(candidate.local_size)})"
            )

        self.console.print(
            f"\nTotal to free: {format_size(selection.total_selected)}"
            + f" (target: {format_size(selection.target_bytes)})"
        )
        self._show_insufficient(selection)
        self.console.print("\nRun with --exec to actually delete.")

    def _show_insufficient(self, selection: SelectionResult) -> None:
        if not selection.insufficient_space:
            return
        self.console.print(
            f"\n[yellow]WARNING: Only {format_size(selection.total_selected)} available for pruning.[/yellow]"
        )
        self.console.print(
            f"[yellow]Cannot reach target of {format_size(selection.target_bytes)}.[/yellow]"
        )

    def show_manual_selection(self, chosen: Sequence[PruneCandidate]) -> None:
        """Recap what the user picked in the interactive selector."""

        self.console.print(f"\nYou selected {len(chosen)} project(s) to delete:")
        for index, candidate in enumerate(chosen, start=1):
            self.console.print(
                f"{index}. {escape(candidate.name)} ({format_size(candidate.local_size)})"
            )
        total = sum(candidate.local_size for candidate in chosen)
        self.console.print(f"\nTotal to free: {format_size(total)}")

    def show_progress(self, report: ProjectReport, success: bool, freed: int) -> None:
        """Progress callback for the executor."""

        name = escape(report.name)
        if success:
            self.console.print(f"Deleting {name}... [green]✓[/green] (freed {format_size(freed)})")
        else:
            self.console.print(f"Deleting {name}... [red]✗[/red] (failed)")

    def show_execution(self, result: ExecutionResult) -> None:
        """Print the final outcome of a prune batch."""

        self.console.print("\n[bold]Prune Summary:[/bold]")
        if result.deleted:
            self.console.print(f"[green]Successfully freed {format_size(result.total_freed)}[/green]")
        else:
            self.console.print("Nothing was deleted.")

        if result.failed:
            self.console.print(f"\n[red]⚠ Failed to delete {len(result.failed)} project(s):[/red]")
            for failure in result.failed:
                self.console.print(
                    f"[red]  • {escape(failure.report.name)}: {escape(failure.message)}[/red]"
                )

        if result.skipped:
            self.console.print(f"[yellow]Not attempted: {len(result.skipped)}[/yellow]")

        if result.state_inconsistent:
            saved_failures = [
                failure.report.name
                for failure in result.failed
                if failure.kind is FailureKind.STATE_SAVE_FAILED
            ]
            self.console.print(
                "\n[bold red]The state file no longer matches the disk.[/bold red] "
                + f"Deleted but not recorded: {escape(', '.join(saved_failures))}. "
                + "Run 'parkr check' and fix the state file before pruning again."
            )

        if not result.target_reached:
            self.console.print(
                f"\nNote: Only freed {format_size(result.total_freed)}"
                + f" of target {format_size(result.target_bytes)}"
            )
