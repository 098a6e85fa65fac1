"""Logging setup for the bookshelf package.

All modules log through ``logging.getLogger(__name__)``; this module
only attaches one stream handler to the package logger so that those
records are shown with a consistent format.
"""

from __future__ import annotations

import logging
import threading

PACKAGE_LOGGER = "bookshelf"

_LOCK = threading.Lock()


def configure_logging(
    level: str = "INFO",
    fmt: str = "%(asctime)s %(levelname)s %(name)s %(message)s",
) -> logging.Logger:
    """Configure the ``bookshelf`` logger. Safe to call more than once."""
    with _LOCK:
        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        handler = next(
            (h for h in logger.handlers if isinstance(h, logging.StreamHandler)),
            None,
        )
        if handler is None:
            handler = logging.StreamHandler()
            logger.addHandler(handler)
        handler.setFormatter(logging.Formatter(fmt))
        logger.propagate = False
        return logger


__all__ = ["configure_logging", "PACKAGE_LOGGER"]
