"""Command line argument parser."""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from parkr.config.config import Config
from parkr.config.settings import DEFAULT_VERIFY_MODE, resolve_state_file
from parkr.features.prune import SortField
from parkr.features.safety import VerifyMode
from parkr.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from parkr.shared import SizeParseError, parse_size
from parkr.ui.cli.args.options import CheckArgs, CLIArgs, InitArgs, PruneArgs, ReportArgs

ARCHIVE_ROOT_ENV = "PARKR_ARCHIVE_ROOT"


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="parkr",
            description="parkr - reclaim disk space by deleting local copies that are safely archived.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        init_parser = subparsers.add_parser(
            "init",
            help="Create the state file and default configuration",
        )
        _ = init_parser.add_argument(
            "archive_root",
            type=str,
            nargs="?",
            help=f"Archive root for the default master (falls back to ${ARCHIVE_ROOT_ENV})",
            metavar="ARCHIVE_ROOT",
        )
        ArgumentParser._add_common_arguments(init_parser)

        prune_parser = subparsers.add_parser(
            "prune",
            help="Delete the oldest safely archived local copies until SIZE is freed",
        )
        _ = prune_parser.add_argument(
            "size",
            type=str,
            help="Amount of space to free, e.g. 10G, 500M, 1.5GB",
            metavar="SIZE",
        )
        _ = prune_parser.add_argument(
            "--exec",
            dest="execute",
            action="store_true",
            help="Actually delete (default is a dry run)",
        )
        _ = prune_parser.add_argument(
            "--interactive",
            action="store_true",
            help="Choose projects in an interactive selector before deleting",
        )
        _ = prune_parser.add_argument(
            "--no-hash",
            action="store_true",
            help="Verify with modification times only",
        )
        _ = prune_parser.add_argument(
            "--force",
            action="store_true",
            help="Skip verification entirely (data may be lost)",
        )
        ArgumentParser._add_common_arguments(prune_parser)

        report_parser = subparsers.add_parser(
            "report",
            help="Show grabbed projects with sizes and safety status",
        )
        _ = report_parser.add_argument(
            "--sort",
            type=str,
            choices=[field.value for field in SortField],
            default=SortField.MODIFIED.value,
            help="Sort order (default: modified)",
        )
        _ = report_parser.add_argument(
            "--verify-hash",
            action="store_true",
            help="Verify content hashes instead of modification times",
        )
        ArgumentParser._add_common_arguments(report_parser)

        check_parser = subparsers.add_parser(
            "check",
            help="Check the state file against the filesystem",
        )
        ArgumentParser._add_common_arguments(check_parser)

        return parser

    @staticmethod
    def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
        """Options shared by every subcommand."""

        _ = parser.add_argument(
            "--state-file",
            type=str,
            help="State file to use (defaults to config, then $PARKR_STATE_FILE)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug logging",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            Args: Processed command line arguments.

        Raises:
            SystemExit: If arguments fail validation.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command
        explicit_state = Path(parsed_args.state_file) if parsed_args.state_file else None
        state_file = resolve_state_file(explicit_state)

        if command == "init":
            return ArgumentParser._process_init(parsed_args, state_file)

        if command == "prune":
            return ArgumentParser._process_prune(parsed_args, state_file)

        if command == "report":
            return ReportArgs(
                command="report",
                state_file=state_file,
                sort_field=SortField(parsed_args.sort),
                verify_hash=parsed_args.verify_hash,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "check":
            return CheckArgs(
                command="check",
                state_file=state_file,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_init(parsed_args: argparse.Namespace, state_file: Path) -> InitArgs:
        raw_root = parsed_args.archive_root or os.environ.get(ARCHIVE_ROOT_ENV, "")
        archive_root = Path(raw_root).expanduser() if raw_root.strip() else None

        return InitArgs(
            command="init",
            archive_root=archive_root,
            state_file=state_file,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _process_prune(parsed_args: argparse.Namespace, state_file: Path) -> PruneArgs:
        try:
            target_bytes = parse_size(parsed_args.size)
        except SizeParseError as e:
            logger.error("Invalid size: %s", e)
            sys.exit(1)

        if parsed_args.no_hash:
            mode = VerifyMode.MTIME_ONLY
        else:
            mode = VerifyMode.from_user_input(DEFAULT_VERIFY_MODE)

        if parsed_args.force and parsed_args.no_hash:
            logger.warning("--no-hash has no effect together with --force")

        return PruneArgs(
            command="prune",
            target_bytes=target_bytes,
            state_file=state_file,
            execute=parsed_args.execute,
            interactive=parsed_args.interactive,
            mode=mode,
            force=parsed_args.force,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
