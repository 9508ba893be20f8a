"""Logging configuration for mdchunk.

Library modules obtain loggers through ``get_logger(__name__)``; the CLI calls
``setup_logging()`` once per command to attach a stderr handler with a level
derived from the ``--verbose`` / ``--quiet`` flags.
"""

import logging
import sys

ROOT_LOGGER_NAME = "mdchunk"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
QUIET_FORMAT = "%(levelname)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the mdchunk logger hierarchy.

    Verbose wins over quiet when both are set.

    Args:
        verbose: Emit DEBUG messages with timestamps.
        quiet: Only emit warnings and errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Reconfiguring replaces our own handler instead of stacking a new one
    for handler in list(logger.handlers):
        if getattr(handler, "_mdchunk_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT if verbose else QUIET_FORMAT))
    handler._mdchunk_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
