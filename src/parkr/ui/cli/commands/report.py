"""Report command implementation for the CLI."""

from __future__ import annotations

from typing import final

from parkr.application.services import StateService
from parkr.features.prune import ReportSummary
from parkr.features.state import JsonProjectStore
from parkr.ui.cli.args.options import ReportArgs
from parkr.ui.cli.display import ReportDisplay


@final
class ReportCommand:
    """Summarise every grabbed project."""

    def __init__(
        self,
        args: ReportArgs,
        *,
        service: StateService | None = None,
        display: ReportDisplay | None = None,
    ) -> None:
        self.args = args
        self.service = service or StateService(JsonProjectStore(args.state_file))
        self.display = display or ReportDisplay()

    def execute(self) -> ReportSummary:
        summary = self.service.report(
            verify_hash=self.args.verify_hash,
            sort_field=self.args.sort_field,
        )
        self.display.show_report(summary, quiet=self.args.quiet)
        return summary
