"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "nutriplan"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(debug: bool = False) -> logging.Logger:
    """Set up the package logger once; later calls only adjust the level.

    Planning services log per-day details at INFO only when their ``debug``
    flag is set, so the level here stays INFO unless debugging.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
