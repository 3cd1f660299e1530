"""Where: src/mbrainz/platform/musicbrainz/http_client.py
What: Blocking WS2 transport built on ``requests`` with throttling retries.
Why: Decouple network concerns from request building and record decoding.
"""

from __future__ import annotations

from typing import Final, TypeVar

import requests

from mbrainz.config.settings import ClientConfig
from mbrainz.features.request import RequestDescriptor
from mbrainz.shared.entities import Entity
from mbrainz.shared.results import BrowseResult, SearchResult

from .rate_limit import Clock, RateLimiter, SystemClock
from .retry import RequestCycle, RequestTrace, RetryPolicy, is_throttled
from .user_agent import resolve_user_agent

T = TypeVar("T", bound=Entity)


class MusicBrainzHTTPClient:
    """Perform rate-limited GET requests and decode the responses.

    The caller's thread is occupied for the whole exchange, including any
    wait for a rate-limit permit and any throttling backoff.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: requests.Session | None = None,
        limiter: RateLimiter | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config: Final[ClientConfig] = config
        self.user_agent: Final[str] = resolve_user_agent(config)
        self.policy: Final[RetryPolicy] = RetryPolicy.from_config(config)
        self._clock: Clock = clock or SystemClock()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        if limiter is not None:
            self.limiter: RateLimiter | None = limiter
        elif config.rate_limit:
            self.limiter = RateLimiter(
                config.rate_limit_interval, config.rate_limit_burst, clock=self._clock
            )
        else:
            self.limiter = None

    @property
    def headers(self) -> dict[str, str]:
        return {"Accept": "application/json", "User-Agent": self.user_agent}

    def execute(
        self,
        descriptor: RequestDescriptor,
        record_type: type[T],
        *,
        trace: RequestTrace | None = None,
    ) -> T | BrowseResult[T] | SearchResult[T]:
        """Send ``descriptor`` and decode the body into ``record_type``.

        Raises:
            RateLimitedError: Throttled beyond ``max_retries``.
            ApiError: Any other non-2xx status.
            TransportError: Connection, timeout, or DNS failure.
            DeserializationError: The body does not fit ``record_type``.
        """
        cycle: RequestCycle[T] = RequestCycle(descriptor, self.config.base_url, self.policy, trace)

        while True:
            cycle.waiting()
            if self.limiter is not None:
                _ = self.limiter.acquire()
            cycle.dispatched()

            try:
                response = self._session.request(
                    descriptor.method,
                    cycle.url,
                    headers=self.headers,
                    timeout=self.config.timeout,
                )
            except requests.RequestException as exc:
                raise cycle.transport_failed(exc) from exc

            status = int(response.status_code)
            if is_throttled(status):
                self._back_off(cycle.throttled(status, response.headers))
                continue

            return cycle.finish(
                status, response.text, record_type, legacy=self.config.legacy_serialize
            )

    def _back_off(self, delay: float) -> None:
        if self.limiter is not None:
            self.limiter.penalize(delay)
        else:
            self._clock.sleep(delay)

    def close(self) -> None:
        """Close the session if this transport created it."""

        if self._owns_session:
            self._session.close()


__all__ = ["MusicBrainzHTTPClient"]
