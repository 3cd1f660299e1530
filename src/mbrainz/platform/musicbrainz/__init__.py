"""MusicBrainz transport adapters and client facades.

Where: platform/musicbrainz/__init__.py
What: Re-export clients, transports, the rate limiter, and retry helpers.
Why: Give applications a single import path for network-facing pieces.
"""

from __future__ import annotations

from .async_http_client import AsyncMusicBrainzHTTPClient
from .client import AsyncMusicBrainzClient, MusicBrainzClient, create_client
from .http_client import MusicBrainzHTTPClient
from .rate_limit import (
    AsyncClock,
    AsyncRateLimiter,
    AsyncSystemClock,
    Clock,
    Permit,
    RateLimiter,
    RateLimitState,
    SystemClock,
)
from .retry import (
    RequestCycle,
    RequestState,
    RequestTrace,
    RetryPolicy,
    backoff_delay,
    is_throttled,
    parse_retry_after,
)
from .user_agent import DEFAULT_USER_AGENT, format_user_agent, resolve_user_agent

__all__ = [
    "AsyncClock",
    "AsyncMusicBrainzClient",
    "AsyncMusicBrainzHTTPClient",
    "AsyncRateLimiter",
    "AsyncSystemClock",
    "Clock",
    "DEFAULT_USER_AGENT",
    "MusicBrainzClient",
    "MusicBrainzHTTPClient",
    "Permit",
    "RateLimitState",
    "RateLimiter",
    "RequestCycle",
    "RequestState",
    "RequestTrace",
    "RetryPolicy",
    "SystemClock",
    "backoff_delay",
    "create_client",
    "format_user_agent",
    "is_throttled",
    "parse_retry_after",
    "resolve_user_agent",
]
