"""Logging utilities for kitgen commands.

Kitfile generation logs one line per classified entry. Those lines go to a
TRACE level below DEBUG so that ``-v`` shows the decisions (model election,
catch-all, license placement) and ``-vv`` also shows every file and directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "kitgen"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS_BY_VERBOSITY = (logging.INFO, logging.DEBUG, TRACE)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the kitgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def trace(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log a per-entry classification detail."""
    logger.log(TRACE, msg, *args)


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level; extra flags saturate at TRACE."""
    index = min(max(verbosity, 0), len(_LEVELS_BY_VERBOSITY) - 1)
    return _LEVELS_BY_VERBOSITY[index]


def configure_logging(*, verbosity: int = 0, log_file: Path | None = None) -> logging.Logger:
    """Send kitgen logs to stderr and, optionally, to ``log_file``.

    The file sink always records TRACE so a saved log explains every
    classification, whatever the console verbosity.
    """
    console_level = level_for_verbosity(verbosity)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    if console_level < logging.INFO:
        console.setFormatter(logging.Formatter("[kitgen] %(levelname)s %(name)s: %(message)s"))
    else:
        console.setFormatter(logging.Formatter("[kitgen] %(message)s"))
    logger.addHandler(console)

    logger_level = console_level
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(TRACE)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger_level = TRACE

    logger.setLevel(logger_level)
    return logger


__all__ = ["TRACE", "configure_logging", "get_logger", "level_for_verbosity", "trace"]
