"""Logging configuration for the matcher package."""

import logging
from typing import Optional

from model_matchers.utils.settings import get_setting

PACKAGE_LOGGER_NAME = "model_matchers"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply the configured log level to the package logger and return it.

    ``level`` overrides ``MODEL_MATCHERS_LOG_LEVEL``; unknown names fall back
    to WARNING.
    """
    level_name = (level or get_setting("log_level")).upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        log_level = logging.WARNING
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.debug("logging_configured: log_level=%s", logging.getLevelName(log_level))
    return logger
