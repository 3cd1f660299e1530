"""Where: src/mbrainz/platform/musicbrainz/user_agent.py
What: Build MusicBrainz-compliant User-Agent strings.
Why: MusicBrainz asks every client to identify itself; keep the etiquette in one place.
"""

from __future__ import annotations

from typing import Final

from mbrainz.config.settings import ClientConfig
from mbrainz.errors import ConfigurationError
from mbrainz.version import __version__

PROJECT_URL: Final[str] = "https://github.com/mbrainz/mbrainz"


def format_user_agent(app_name: str, app_version: str, contact: str = "") -> str:
    """Return ``App/Version ( contact )``, or ``App/Version`` without contact."""

    stripped = contact.strip()
    if stripped:
        return f"{app_name}/{app_version} ( {stripped} )"
    return f"{app_name}/{app_version}"


DEFAULT_USER_AGENT: Final[str] = format_user_agent("mbrainz", __version__, PROJECT_URL)


def resolve_user_agent(config: ClientConfig) -> str:
    """Pick the User-Agent outbound requests should send.

    An explicit ``user_agent`` wins, then the app identity fields, then the
    library default.
    """

    if config.user_agent and config.user_agent.strip():
        return config.user_agent.strip()
    if config.app_name:
        if not config.app_version:
            raise ConfigurationError("app_version is required when app_name is set")
        return format_user_agent(config.app_name, config.app_version, config.contact or "")
    return DEFAULT_USER_AGENT


__all__ = [
    "DEFAULT_USER_AGENT",
    "format_user_agent",
    "resolve_user_agent",
]
