"""Logging configuration for Career Match AI."""

import logging
import sys
from typing import Optional

from career_match_ai.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Logger writing to stdout; level defaults to LOG_LEVEL from the environment."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO) if level is None else level)
    elif level is not None:
        logger.setLevel(level)
    return logger
