"""Logging configuration for todosync.

The TUI owns the terminal, so nothing is logged unless the user asks for it
with ``-v`` (stderr) or ``--log-file``. Everything goes through the
``todosync`` logger namespace; module loggers propagate up to it.
"""

import logging
import sys

from . import __version__
from .config import Settings

LOGGER_NAME = "todosync"

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_for(verbose: int) -> int:
    return logging.DEBUG if verbose >= 2 else logging.INFO


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if settings.verbose > 0:
        handlers.append(logging.StreamHandler(sys.stderr))
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    return handlers


def setup_logging(settings: Settings) -> logging.Logger | None:
    """Attach handlers for the requested outputs to the todosync logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        settings: Verbosity (0=off, 1=INFO, 2+=DEBUG) and log_file are read

    Returns:
        The configured logger, or None when no output was requested.
    """
    handlers = _build_handlers(settings)
    if not handlers:
        return None

    level = _level_for(settings.verbose)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for old in logger.handlers[:]:
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(
        "todosync %s starting (api=%s, data_dir=%s, level=%s)",
        __version__,
        settings.api_url,
        settings.data_dir,
        logging.getLevelName(level),
    )
    return logger
