"""
Logging setup for scripts and demos.

Library modules only create ``logging.getLogger(__name__)`` loggers under
the ``maxwellsim`` namespace and never configure handlers themselves.
"""

from __future__ import annotations
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Route ``maxwellsim`` log records to stdout and optionally a file.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: Also write records here (overwritten on each setup)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("maxwellsim")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)

    logger.info("Logging initialized at %s", logging.getLevelName(level))
    return logger
