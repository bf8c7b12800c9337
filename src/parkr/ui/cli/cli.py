"""Command line interface for parkr."""

import sys
from collections.abc import Sequence
from typing import Final, final

from parkr.features.interactive import NotATerminalError
from parkr.features.state import StateError
from parkr.platform.logging import logger
from parkr.ui.cli.args import ArgumentParser
from parkr.ui.cli.args.options import CheckArgs, CLIArgs, InitArgs, PruneArgs, ReportArgs
from parkr.ui.cli.commands import CheckCommand, InitCommand, PruneCommand, ReportCommand

EXIT_OK: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_STATE_INCONSISTENT: Final[int] = 2
EXIT_INTERRUPTED: Final[int] = 130


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: Sequence[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            code = CommandProcessor._dispatch(args)
            if code != EXIT_OK:
                sys.exit(code)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(EXIT_INTERRUPTED)
        except (StateError, NotATerminalError, FileExistsError, ValueError) as e:
            logger.error("%s", e)
            sys.exit(EXIT_FAILURE)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(EXIT_FAILURE)

    @staticmethod
    def _dispatch(args: CLIArgs) -> int:
        if isinstance(args, InitArgs):
            _ = InitCommand(args).execute()
            return EXIT_OK

        if isinstance(args, PruneArgs):
            result = PruneCommand(args).execute()
            if result is None:
                return EXIT_OK
            if result.state_inconsistent:
                return EXIT_STATE_INCONSISTENT
            return EXIT_FAILURE if result.failed else EXIT_OK

        if isinstance(args, ReportArgs):
            _ = ReportCommand(args).execute()
            return EXIT_OK

        assert isinstance(args, CheckArgs)
        report = CheckCommand(args).execute()
        return EXIT_FAILURE if report.issues else EXIT_OK


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures call ``sys.exit``
        from ``CommandProcessor`` so this return is only reached on success.
    """
    CommandProcessor.process_command()
    return 0
