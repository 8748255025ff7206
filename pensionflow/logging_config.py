"""
Logging configuration for the PensionFlow service.

All modules log through ``logging.getLogger(__name__)`` below the
``pensionflow`` logger; this module only attaches the handler once.
"""

import logging
from typing import Union

PACKAGE_LOGGER = "pensionflow"

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGING_CONFIGURED = False


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again only updates the level, so the app factory can be run
    several times (e.g. once per test) without duplicating output.

    Args:
        level: Logging level name or number for the package logger
    """
    global _LOGGING_CONFIGURED

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if _LOGGING_CONFIGURED:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    _LOGGING_CONFIGURED = True
    return logger
