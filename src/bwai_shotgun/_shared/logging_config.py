# Area: Shared
"""
bwai_shotgun._shared.logging_config — Structured logging setup
==============================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides error logging and termination functions.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .logging_formatters import JSONFormatter, TerminalFormatter

if TYPE_CHECKING:
    from ..errors import ShotgunError

# Package logger
logger = logging.getLogger("bwai_shotgun")


def setup_logging(
    log_file_path: Union[str, Path] = "shotgun.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str or Path
        Path to the log file. Defaults to 'shotgun.log' in current dir.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("bwai_shotgun")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    try:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        pkg_logger.addHandler(file_handler)
    except OSError as e:
        pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_shotgun_error(error: "ShotgunError") -> None:
    """
    Log a match setup error in the structured format.

    Parameters
    ----------
    error : ShotgunError
        The error to log.
    """
    error_block = error.format_error_log()

    # Print to terminal (bypassing logger for exact formatting)
    print(error_block, file=sys.stderr)

    logger.error(
        f"Match setup error: {error.__class__.__name__}: {error.message}",
        extra={
            "bot": error.bot,
            "stage": error.stage,
            "path": error.path,
            "error_type": error.error_type,
        },
    )


def log_and_terminate(error: "ShotgunError", exit_code: int = 1) -> None:
    """
    Log the error and terminate the process.

    Parameters
    ----------
    error : ShotgunError
        The error to log.
    exit_code : int
        Exit code for the process. Defaults to 1.
    """
    log_shotgun_error(error)
    logger.critical("Process terminated due to match setup error")
    sys.exit(exit_code)
