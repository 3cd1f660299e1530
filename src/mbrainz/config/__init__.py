"""Configuration exports.

Where: config/__init__.py
What: Re-export path helpers and the validated client configuration.
Why: Callers import settings from one place.
"""

from __future__ import annotations

from .paths import ENV_CONFIG_PATH, default_config_path, default_log_file
from .settings import (
    DEFAULT_BASE_URL,
    ENV_OVERRIDES,
    ClientConfig,
    ExecutionMode,
    load_config,
    read_config_file,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "ENV_CONFIG_PATH",
    "ENV_OVERRIDES",
    "ClientConfig",
    "ExecutionMode",
    "default_config_path",
    "default_log_file",
    "load_config",
    "read_config_file",
]
