"""Logging setup for processes hosting the service."""

import logging
from typing import Optional

from src.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler. Falls back to the configured log level."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
