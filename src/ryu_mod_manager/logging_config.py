"""Logging configuration for Ryu Mod Manager.

Provides centralized logging setup with file and console handlers.
Logging is only written out in debug mode, so a normal run leaves no log
file in the game directory. In debug mode the log file is written next to
YakuzaParless.ini.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config.paths import ManagerPaths


def setup_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure application-wide logging.

    In debug mode, sets up logging to a file (rewritten on every run) and to
    the console. Otherwise log records are discarded.

    Args:
        debug: If True, log to file and console at DEBUG level
        log_file: Log file location, defaults to RyuModManager.log in the
            current game directory

    Returns:
        The root logger for the application
    """
    if log_file is None:
        log_file = ManagerPaths().log_file

    logger = logging.getLogger("ryu_mod_manager")
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if not debug:
        logger.addHandler(logging.NullHandler())
        return logger

    try:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    except OSError as e:
        # Read-only game directory; keep running without a log file
        sys.stderr.write(f"Could not open log file {log_file}: {e}\n")
    else:
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_formatter = logging.Formatter(
        "%(levelname)s - %(name)s - %(message)s"
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: Module name (e.g., 'manifest', 'update_checker')

    Returns:
        A logger instance for the module
    """
    return logging.getLogger(f"ryu_mod_manager.{name}")
