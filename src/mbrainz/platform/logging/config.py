"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Expose the shared ``mbrainz`` logger and an opt-in console/file setup.
Why: A library stays silent until the application asks for output.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final

from rich.console import Console

from .handlers import RequestRichHandler

LOGGER_NAME: Final[str] = "mbrainz"


def setup_logger(
    log_file: Path | str | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    console: Console | None = None,
) -> logging.Logger:
    """Attach Rich console output and, optionally, a rotating log file.

    Args:
        log_file: Path to the log file. ``"default"`` selects
            ``<repo_root>/logs/mbrainz.log``; ``None`` disables file output.
        console_level: Logging level for console output.
        file_level: Logging level for file output.
        console: Console to render into. Defaults to stderr.

    Returns:
        logging.Logger: The configured ``mbrainz`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    console_handler = RequestRichHandler(
        console=console or Console(stderr=True, soft_wrap=True)
    )
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        from mbrainz.config.paths import default_log_file

        target = default_log_file() if log_file == "default" else Path(log_file)
        resolved_log_file = target.expanduser().resolve()
        os.makedirs(resolved_log_file.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def reset_logger() -> logging.Logger:
    """Drop configured handlers and return to the silent default."""

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    return logger


logger: Final[logging.Logger] = logging.getLogger(LOGGER_NAME)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


__all__ = ["LOGGER_NAME", "logger", "reset_logger", "setup_logger"]
