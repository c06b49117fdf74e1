"""Logging setup for scripts that use :mod:`iso2d`."""

from __future__ import annotations

import logging
from typing import Optional

__all__ = ["configure_logging"]

_FORMAT = "%(asctime)s iso2d - %(levelname)s - %(message)s"


def configure_logging(level: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``iso2d`` logger.

    The library itself never calls this; command-line drivers do.

    Parameters
    ----------
    level:
        Logging level, e.g. ``logging.DEBUG``.
    logfile:
        Also write records to this path when given.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger("iso2d")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if logfile is not None:
        file_handler = logging.FileHandler(logfile)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
