"""Check command implementation for the CLI."""

from __future__ import annotations

from typing import final

from parkr.application.services import StateService
from parkr.features.state import ConsistencyReport, JsonProjectStore
from parkr.ui.cli.args.options import CheckArgs
from parkr.ui.cli.display import StateCheckDisplay


@final
class CheckCommand:
    """Report inconsistencies between the state file and the disk."""

    def __init__(
        self,
        args: CheckArgs,
        *,
        service: StateService | None = None,
        display: StateCheckDisplay | None = None,
    ) -> None:
        self.args = args
        self.service = service or StateService(JsonProjectStore(args.state_file))
        self.display = display or StateCheckDisplay()

    def execute(self) -> ConsistencyReport:
        report = self.service.check()
        self.display.show_report(report, quiet=self.args.quiet)
        return report
