"""Logging setup for scripts and services embedding the package."""

import logging
from typing import Optional

from ecash.config import get_settings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None):
    """
    Configure root logging once.

    Args:
        level: Level name; defaults to the configured ``log_level``
    """
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
