"""Logging configuration for the storefront.

Every module logs through ``logging.getLogger(__name__)``; this module
attaches the single console handler to the package logger.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "storefront"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stderr handler to the package logger (once) and set its level."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    # Prevent propagation to root logger (avoid duplicate logs)
    logger.propagate = False
    return logger
