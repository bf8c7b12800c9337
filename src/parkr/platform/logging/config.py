"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Build the ``parkr`` logger: a Rich console handler on stderr plus a rotating
    debug log under ``<data_dir>/logs`` (``PARKR_HOME`` aware, see config.paths).
Why: stdout carries reports and dry-run listings; diagnostics must never mix into it.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final

from rich.console import Console

from parkr.config.paths import default_log_file

from .handlers import PruneRichHandler

LOGGER_NAME: Final[str] = "parkr"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT: Final[int] = 3
FILE_LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logger(
    log_file: Path | None = DEFAULT_LOG_FILE,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    *,
    console: Console | None = None,
) -> logging.Logger:
    """(Re)configure the ``parkr`` logger and return it.

    Existing handlers are closed first, so the CLI can call this again once the
    verbosity flags and the configured log file are known. ``log_file=None``
    disables file logging; a log directory that cannot be created only costs
    the file handler, never the run.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = PruneRichHandler(
        console=console or Console(stderr=True, soft_wrap=True)
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is None:
        return logger

    resolved_log_file = Path(log_file).expanduser().resolve()
    try:
        os.makedirs(resolved_log_file.parent, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as exc:
        logger.warning("File logging disabled (%s): %s", resolved_log_file, exc)
    else:
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "setup_logger", "logger"]
