"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the shared logger, setup helpers, and the Rich request handler.
Why: Provide a single canonical import path for every module that logs.
"""

from __future__ import annotations

from .config import LOGGER_NAME, logger, reset_logger, setup_logger
from .handlers import RequestRichHandler

__all__ = [
    "LOGGER_NAME",
    "RequestRichHandler",
    "logger",
    "reset_logger",
    "setup_logger",
]
