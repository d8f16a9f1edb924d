"""
Logging configuration for codemetrics.

Library modules only ever call ``get_logger``; handlers are installed by the
command line through ``setup_logging``. Records go to stderr through rich so
they never mix with JSON written to stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "codemetrics"

_FILE_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install handlers on the ``codemetrics`` logger.

    Calling it again replaces the previous handlers, so running several
    commands in one process does not duplicate output.

    Args:
        verbose: Log skip decisions and engine dispatch (DEBUG)
        quiet: Only log errors
        log_file: Also append records to this file

    Returns:
        The configured ``codemetrics`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_path=verbose,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(_level_for(verbose, quiet))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the ``codemetrics`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger;
    names from outside the package are prefixed.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
