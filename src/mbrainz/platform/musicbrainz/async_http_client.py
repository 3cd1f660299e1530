"""Where: src/mbrainz/platform/musicbrainz/async_http_client.py
What: Suspending WS2 transport built on ``httpx.AsyncClient``.
Why: Event-loop applications need the same retry and decode behaviour
     without blocking the loop while waiting for a permit or the network.
"""

from __future__ import annotations

from typing import Final, TypeVar

import httpx

from mbrainz.config.settings import ClientConfig
from mbrainz.features.request import RequestDescriptor
from mbrainz.shared.entities import Entity
from mbrainz.shared.results import BrowseResult, SearchResult

from .rate_limit import AsyncClock, AsyncRateLimiter, AsyncSystemClock
from .retry import RequestCycle, RequestTrace, RetryPolicy, is_throttled
from .user_agent import resolve_user_agent

T = TypeVar("T", bound=Entity)


class AsyncMusicBrainzHTTPClient:
    """Awaitable counterpart of ``MusicBrainzHTTPClient``.

    Suspends only while waiting for a permit or backoff and while the
    request is in flight.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
        limiter: AsyncRateLimiter | None = None,
        clock: AsyncClock | None = None,
    ) -> None:
        self.config: Final[ClientConfig] = config
        self.user_agent: Final[str] = resolve_user_agent(config)
        self.policy: Final[RetryPolicy] = RetryPolicy.from_config(config)
        self._clock: AsyncClock = clock or AsyncSystemClock()
        self._owns_client = client is None
        self._client = (
            client
            if client is not None
            else httpx.AsyncClient(
                timeout=httpx.Timeout(config.read_timeout, connect=config.connect_timeout)
            )
        )
        if limiter is not None:
            self.limiter: AsyncRateLimiter | None = limiter
        elif config.rate_limit:
            self.limiter = AsyncRateLimiter(
                config.rate_limit_interval, config.rate_limit_burst, clock=self._clock
            )
        else:
            self.limiter = None

    @property
    def headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": self.user_agent}

    async def execute(
        self,
        descriptor: RequestDescriptor,
        record_type: type[T],
        *,
        trace: RequestTrace | None = None,
    ) -> T | BrowseResult[T] | SearchResult[T]:
        """Send ``descriptor`` and decode the body; errors match the blocking transport."""

        cycle: RequestCycle[T] = RequestCycle(descriptor, self.config.base_url, self.policy, trace)

        while True:
            cycle.waiting()
            if self.limiter is not None:
                _ = await self.limiter.acquire()
            cycle.dispatched()

            try:
                response = await self._client.request(
                    descriptor.method,
                    cycle.url,
                    headers=self.headers,
                    timeout=httpx.Timeout(
                        self.config.read_timeout, connect=self.config.connect_timeout
                    ),
                )
            except httpx.HTTPError as exc:
                raise cycle.transport_failed(exc) from exc

            status = response.status_code
            if is_throttled(status):
                await self._back_off(cycle.throttled(status, response.headers))
                continue

            return cycle.finish(
                status, response.text, record_type, legacy=self.config.legacy_serialize
            )

    async def _back_off(self, delay: float) -> None:
        if self.limiter is not None:
            self.limiter.penalize(delay)
        else:
            await self._clock.sleep(delay)

    async def aclose(self) -> None:
        """Close the ``httpx`` client if this transport created it."""

        if self._owns_client:
            await self._client.aclose()


__all__ = ["AsyncMusicBrainzHTTPClient"]
