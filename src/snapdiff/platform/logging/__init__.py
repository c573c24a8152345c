"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export configured logger, setup helpers, build logger and Rich handler.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .build_logger import BuildEvent, BuildLogger, log_tag
from .config import DEFAULT_LOG_FILE, LOGGER_NAME, logger, setup_logger
from .handlers import SnapRichHandler

__all__ = [
    "BuildEvent",
    "BuildLogger",
    "DEFAULT_LOG_FILE",
    "LOGGER_NAME",
    "SnapRichHandler",
    "log_tag",
    "logger",
    "setup_logger",
]
