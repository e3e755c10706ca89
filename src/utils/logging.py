"""Logging helpers.

Wraps Python's standard logging module so every module in the package
logs with the same format.  Modules call ``get_logger(__name__)`` at
import time; the batch runner sets the level from its configuration
with ``set_level``.
"""

import logging
from typing import Optional, Union

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

ROOT_LOGGER = 'src'


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return a logger that writes through the package handler.

    Parameters
    ----------
    name : str
        Logger name, normally ``__name__`` of the calling module.
    level : int or str, optional
        Level to set on the returned logger.

    Returns
    -------
    logging.Logger
        Configured logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: Union[int, str]) -> None:
    """Set the level for all package loggers."""
    get_logger(ROOT_LOGGER).setLevel(level.upper() if isinstance(level, str) else level)
