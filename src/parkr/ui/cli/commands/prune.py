"""Prune command implementation for the CLI."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import final

from rich.prompt import Confirm

from parkr.application.services import PruneRequest, PruneService
from parkr.config.settings import CONFIRM_INTERACTIVE
from parkr.features.interactive import InteractiveSelector, run_interactive_selection
from parkr.features.prune import ExecutionResult, PruneCandidate, SelectionResult
from parkr.features.state import JsonProjectStore
from parkr.ui.cli.args.options import PruneArgs
from parkr.ui.cli.display import PruneResultDisplay

InteractiveRunner = Callable[[Sequence[PruneCandidate], int], InteractiveSelector]


@final
class PruneCommand:
    """Dry-run, interactive or executing prune against the state file."""

    def __init__(
        self,
        args: PruneArgs,
        *,
        service: PruneService | None = None,
        display: PruneResultDisplay | None = None,
        interactive_runner: InteractiveRunner = run_interactive_selection,
        confirm_interactive: bool = CONFIRM_INTERACTIVE,
    ) -> None:
        self.args = args
        self.service = service or PruneService(JsonProjectStore(args.state_file))
        self.display = display or PruneResultDisplay()
        self.interactive_runner = interactive_runner
        self.confirm_interactive = confirm_interactive
        if args.quiet:
            self.display.console.quiet = True

    def execute(self) -> ExecutionResult | None:
        """Execute the prune command.

        Returns:
            The batch outcome, or ``None`` when nothing was attempted.
        """

        request = PruneRequest(
            target_bytes=self.args.target_bytes,
            mode=self.args.mode,
            force=self.args.force,
        )
        selection = self.service.select(request)
        self.display.show_warnings(selection)

        if selection.no_candidates:
            self.display.show_no_candidates(forced=selection.forced)
            return None

        if self.args.interactive:
            if not self._choose_interactively(selection):
                return None
        elif not self.args.execute:
            self.display.show_dry_run(selection)
            return None

        return self._run(request, selection)

    def _choose_interactively(self, selection: SelectionResult) -> bool:
        """Let the user edit the selection; return whether to go on deleting."""

        selector = self.interactive_runner(selection.candidates, selection.target_bytes)
        if not selector.confirmed:
            self.display.console.print("Selection cancelled. No projects deleted.")
            return False

        chosen = selector.selected_candidates()
        if not chosen:
            self.display.console.print("No projects selected. Nothing to delete.")
            return False

        _ = self.service.apply_choice(selection, chosen)
        self.display.show_manual_selection(chosen)

        if self.confirm_interactive and not Confirm.ask(
            "\nProceed with deletion?", default=False, console=self.display.console
        ):
            self.display.console.print("Deletion cancelled.")
            return False
        return True

    def _run(self, request: PruneRequest, selection: SelectionResult) -> ExecutionResult:
        self.display.console.print("Deleting projects...\n")
        result = self.service.execute(
            request,
            selection,
            on_progress=self.display.show_progress,
        )
        self.display.show_execution(result)
        return result
