"""Logging setup for the ``dev`` CLI.

User-facing output goes through the rich console in ``ui``; logging is for
diagnostics and stays on stderr (and optionally a log file).
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir
from rich.logging import RichHandler

from .ui import err_console

LOG_FILE_ENV = "DEVUTILS_LOG_FILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_file_path() -> Path:
    return Path(user_log_dir("devutils", appauthor=False)) / "dev.log"


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Attach handlers to the ``devutils_cli`` logger. Safe to call repeatedly."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root = logging.getLogger("devutils_cli")
    root.setLevel(logging.DEBUG)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(console=err_console, show_time=False, show_path=verbose, markup=False)
    console_handler.setLevel(level)
    root.addHandler(console_handler)

    if os.environ.get(LOG_FILE_ENV, "").lower() in ("1", "true", "yes"):
        path = log_file_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
