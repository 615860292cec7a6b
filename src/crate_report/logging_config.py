"""Logging for crate-report.

Records go to stderr through Rich so that stdout only ever carries the
rendered report; a pipeline like ``crate-report -f csv > baseline.csv``
stays clean at any verbosity.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "crate_report"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install the Rich stderr handler (and optionally a file handler).

    ``quiet`` wins over ``verbose``. Calling this again replaces the
    previous configuration.

    Returns:
        The ``crate_report`` package logger
    """
    level = LEVELS["quiet" if quiet else "verbose" if verbose else "normal"]

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger in the ``crate_report`` namespace.

    Module ``__name__`` values inside the package pass through unchanged;
    any other name is nested under the package logger.
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
