"""Where: src/mbrainz/errors.py
What: Exception taxonomy shared by builders, transports, and the codec.
Why: Callers handle one hierarchy regardless of execution mode.
"""

from __future__ import annotations

import json


class MusicBrainzError(Exception):
    """Base class for every error raised by mbrainz."""


class ValidationError(MusicBrainzError):
    """Bad builder input detected before any network call."""


class InvalidIncludeError(ValidationError):
    """An include flag is not legal for the entity kind and operation."""

    def __init__(self, message: str, *, flag: str | None = None, kind: str | None = None) -> None:
        super().__init__(message)
        self.flag = flag
        self.kind = kind


class InvalidFilterError(ValidationError):
    """A release type/status filter is unknown or lacks a matching include."""


class InvalidSearchFieldError(ValidationError):
    """A search field is not indexed for the entity kind."""


class PaginationError(ValidationError):
    """``limit`` or ``offset`` is out of range."""


class ConfigurationError(MusicBrainzError):
    """Client configuration is invalid."""


class IncludeConfigurationError(ConfigurationError):
    """The include implication table contains a cycle."""


class RateLimitedError(MusicBrainzError):
    """The server kept throttling after the retry budget was spent."""

    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(f"Rate limited by MusicBrainz after {attempts} attempts: {url}")
        self.url = url
        self.attempts = attempts


class ApiError(MusicBrainzError):
    """The server answered with a non-throttling error status."""

    def __init__(self, status: int, body: str, *, url: str | None = None) -> None:
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"MusicBrainz HTTP error {status}: {_error_message(body)}")


class TransportError(MusicBrainzError):
    """Connectivity failure (refused connection, timeout, DNS)."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class DeserializationError(MusicBrainzError):
    """The response body does not match the expected record schema."""

    def __init__(self, message: str, *, raw_body: str) -> None:
        super().__init__(message)
        self.raw_body = raw_body


def _error_message(body: str) -> str:
    """Extract the ``error`` field WS2 returns in JSON error bodies."""

    try:
        payload = json.loads(body)
    except ValueError:
        return body.strip()[:200] or "<empty body>"
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return body.strip()[:200]


__all__ = [
    "ApiError",
    "ConfigurationError",
    "DeserializationError",
    "IncludeConfigurationError",
    "InvalidFilterError",
    "InvalidIncludeError",
    "InvalidSearchFieldError",
    "MusicBrainzError",
    "PaginationError",
    "RateLimitedError",
    "TransportError",
    "ValidationError",
]
