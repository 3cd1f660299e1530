"""Where: src/mbrainz/config/settings.py
What: Validated client configuration sourced from arguments, TOML, and environment.
Why: Expose one immutable settings value to clients and transports.
Assumptions: - Config files are optional; defaults target the public MusicBrainz server.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Final

from mbrainz.errors import ConfigurationError
from mbrainz.platform.logging import logger

from .paths import default_config_path

DEFAULT_BASE_URL: Final[str] = "https://musicbrainz.org/ws/2"


class ExecutionMode(str, Enum):
    """How a client runs requests."""

    BLOCKING = "blocking"
    ASYNC = "async"


# Environment variables mapped onto ``ClientConfig`` fields.
ENV_OVERRIDES: Final[dict[str, str]] = {
    "MBRAINZ_BASE_URL": "base_url",
    "MBRAINZ_USER_AGENT": "user_agent",
    "MBRAINZ_RATE_LIMIT_INTERVAL": "rate_limit_interval",
    "MBRAINZ_RATE_LIMIT_BURST": "rate_limit_burst",
    "MBRAINZ_CONNECT_TIMEOUT": "connect_timeout",
    "MBRAINZ_READ_TIMEOUT": "read_timeout",
    "MBRAINZ_MODE": "mode",
    "MBRAINZ_LEGACY_SERIALIZE": "legacy_serialize",
    "MBRAINZ_MAX_RETRIES": "max_retries",
}

_TRUE = {"true", "1", "yes", "y", "on"}
_FALSE = {"false", "0", "no", "n", "off"}


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Client settings.

    Attributes:
        base_url: WS2 root, overridable to point at a mock server.
        user_agent: Full User-Agent string; wins over the app identity fields.
        app_name: Application name used to build a User-Agent.
        app_version: Application version used to build a User-Agent.
        contact: Contact URL or e-mail appended to the User-Agent.
        rate_limit: Whether outgoing requests are throttled locally.
        rate_limit_interval: Seconds between permits (MusicBrainz asks for 1).
        rate_limit_burst: Permits that may be used back to back.
        connect_timeout: Socket connect timeout passed to the HTTP library.
        read_timeout: Read timeout passed to the HTTP library.
        mode: Blocking or asynchronous execution.
        legacy_serialize: Emit snake_case keys and accept them when decoding.
        max_retries: Retries after throttling responses before giving up.
        default_backoff: Delay used when the server sends no ``Retry-After``.
        max_backoff: Upper bound for any throttling delay.
    """

    base_url: str = DEFAULT_BASE_URL
    user_agent: str | None = None
    app_name: str | None = None
    app_version: str | None = None
    contact: str | None = None
    rate_limit: bool = True
    rate_limit_interval: float = 1.0
    rate_limit_burst: int = 1
    connect_timeout: float = 5.0
    read_timeout: float = 15.0
    mode: ExecutionMode = ExecutionMode.BLOCKING
    legacy_serialize: bool = False
    max_retries: int = 5
    default_backoff: float = 1.0
    max_backoff: float = 60.0

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"base_url must be an http(s) URL: {self.base_url!r}")
        if self.rate_limit_interval <= 0:
            raise ConfigurationError("rate_limit_interval must be positive")
        if self.rate_limit_burst < 1:
            raise ConfigurationError("rate_limit_burst must be at least 1")
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ConfigurationError("timeouts must be positive")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must not be negative")
        if self.default_backoff < 0 or self.max_backoff < self.default_backoff:
            raise ConfigurationError("backoff bounds must satisfy 0 <= default_backoff <= max_backoff")
        if not isinstance(self.mode, ExecutionMode):
            object.__setattr__(self, "mode", _coerce_mode(self.mode))

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)

    def with_overrides(self, **overrides: Any) -> ClientConfig:
        return replace(self, **_coerce_values(overrides))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> ClientConfig:
        """Build a config from loosely typed values (TOML tables, env strings)."""

        return cls(**_coerce_values(values))


def _coerce_mode(value: Any) -> ExecutionMode:
    try:
        return ExecutionMode(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(mode.value for mode in ExecutionMode)
        raise ConfigurationError(f"mode must be one of {allowed}, got {value!r}") from None


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _coerce_values(values: Mapping[str, Any]) -> dict[str, Any]:
    kinds = {f.name: f.type for f in fields(ClientConfig)}
    out: dict[str, Any] = {}
    for name, value in values.items():
        if name not in kinds:
            raise ConfigurationError(f"Unknown configuration key: {name!r}")
        declared = str(kinds[name])
        try:
            if value is None:
                out[name] = None
            elif name == "mode":
                out[name] = _coerce_mode(value)
            elif declared == "bool":
                out[name] = _coerce_bool(name, value)
            elif declared == "int":
                if isinstance(value, bool):
                    raise ValueError(value)
                out[name] = int(value)
            elif declared == "float":
                if isinstance(value, bool):
                    raise ValueError(value)
                out[name] = float(value)
            else:
                out[name] = str(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid value for {name}: {value!r}") from None
    return out


def read_config_file(path: Path) -> dict[str, Any]:
    """Read the TOML file; keys may sit at top level or under ``[mbrainz]``."""

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Failed to read configuration {path}: {exc}") from exc

    section = data.get("mbrainz", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"[mbrainz] in {path} must be a table")
    return dict(section)


def load_config(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ClientConfig:
    """Load configuration from file, environment, and keyword overrides.

    Precedence, lowest first: defaults, TOML file, ``MBRAINZ_*`` environment
    variables, keyword overrides. An explicitly named file must exist; the
    default location is skipped when absent.

    Args:
        path: Config file. Defaults to ``MBRAINZ_CONFIG`` or the project config.
        env: Environment mapping. Defaults to ``os.environ``.
        **overrides: Field values that win over every other source.

    Returns:
        ClientConfig: The merged, validated configuration.
    """
    environ = env if env is not None else os.environ
    values: dict[str, Any] = {}

    config_file = Path(path).expanduser().resolve() if path is not None else default_config_path(environ)
    if config_file.exists():
        values.update(read_config_file(config_file))
        logger.debug("Configuration loaded from %s", config_file)
    elif path is not None:
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    for env_var, name in ENV_OVERRIDES.items():
        raw = environ.get(env_var)
        if raw is not None and raw.strip():
            values[name] = raw.strip()

    values.update(overrides)
    return ClientConfig.from_mapping(values)


__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "ENV_OVERRIDES",
    "ExecutionMode",
    "load_config",
    "read_config_file",
]
