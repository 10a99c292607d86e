"""Logger factory shared by every module of the package."""

import logging
import os

LOG_LEVEL_ENV = "ANTIQUE_IDENTIFIER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(name: str) -> int:
    """
    Level for a package logger.

    The CLI reports progress at INFO, library modules only warn. A valid level
    name or number in ANTIQUE_IDENTIFIER_LOG_LEVEL overrides both.
    """
    default = logging.INFO if name.endswith(".cli") else logging.WARNING

    configured = os.getenv(LOG_LEVEL_ENV, "").strip()
    if not configured:
        return default
    if configured.isdigit():
        return int(configured)

    level = logging.getLevelName(configured.upper())
    return level if isinstance(level, int) else default


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(name))
    return logger
