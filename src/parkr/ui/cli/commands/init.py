"""Init command implementation for the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console
from rich.prompt import Prompt

from parkr.application.services import StateService
from parkr.features.state import JsonProjectStore, State
from parkr.ui.cli.args.options import InitArgs


@final
class InitCommand:
    """Create a fresh state file rooted at an archive directory."""

    def __init__(
        self,
        args: InitArgs,
        *,
        service: StateService | None = None,
        console: Console | None = None,
    ) -> None:
        self.args = args
        self.service = service or StateService(JsonProjectStore(args.state_file))
        self.console = console or Console(quiet=args.quiet)

    def execute(self) -> State:
        """Execute the init command.

        Raises:
            FileExistsError: If the state file already exists.
            ValueError: If no archive root was given or entered.
        """

        archive_root = self.args.archive_root
        if archive_root is None:
            answer = Prompt.ask("Enter archive root path", console=self.console, default="")
            if not answer.strip():
                raise ValueError("archive root path is required")
            archive_root = Path(answer.strip()).expanduser()

        state = self.service.initialise(archive_root)
        self.console.print(f"Initialized parkr state file at {self.service.store.path}")
        self.console.print(f"Archive root: {archive_root}")
        return state
