"""Structured logging utilities."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from hotel_booking.utils.config import Settings, get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install the stdout handler once and apply the settings' log level.

    Module loggers are created at import time, before ``create_app`` has its
    settings, so later calls only move the root level.
    """

    global _LOGGER_INITIALIZED
    resolved_level = (settings or get_settings()).log_level.upper()

    if not _LOGGER_INITIALIZED:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout)
        _LOGGER_INITIALIZED = True
    logging.getLogger().setLevel(resolved_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the requested module."""
    if not _LOGGER_INITIALIZED:
        configure_logging()
    return logging.getLogger(name)
