"""Where: src/mbrainz/platform/musicbrainz/client.py
What: Client facades binding request builders to a transport.
Why: Callers pick an execution mode once and then build requests fluently.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, TypeVar

import httpx
import requests

from mbrainz.config.settings import ClientConfig, ExecutionMode
from mbrainz.errors import ConfigurationError, ValidationError
from mbrainz.features.request import BrowseBy, RequestBuilder
from mbrainz.features.search import SearchQuery
from mbrainz.shared.entities import Entity
from mbrainz.shared.kinds import EntityKind
from mbrainz.shared.results import BrowseResult, SearchResult

from .async_http_client import AsyncMusicBrainzHTTPClient
from .http_client import MusicBrainzHTTPClient
from .rate_limit import AsyncClock, AsyncRateLimiter, Clock, RateLimiter
from .retry import RequestTrace

T = TypeVar("T", bound=Entity)


def _check_mode(config: ClientConfig, expected: ExecutionMode, client: str) -> None:
    if config.mode is not expected:
        raise ConfigurationError(
            f"{client} needs mode={expected.value!r}, got {config.mode.value!r}; use create_client()"
        )


class _BuilderFactory:
    """Builder entry points shared by both facades."""

    def fetch(self, record_type: type[T], mbid: str | None = None) -> RequestBuilder[T]:
        """Start a lookup; pass ``mbid`` now or call ``.id()`` later."""

        builder = RequestBuilder(record_type=record_type, executor=self)
        return builder.id(mbid) if mbid is not None else builder

    def browse(
        self,
        record_type: type[T],
        link: BrowseBy | EntityKind | str | None = None,
        mbid: str | None = None,
    ) -> RequestBuilder[T]:
        """Start a browse of ``record_type`` entities linked to ``link``/``mbid``."""

        builder = RequestBuilder(record_type=record_type, executor=self)
        if link is None and mbid is None:
            return builder
        if link is None or mbid is None:
            raise ValidationError("browse() needs both a link and an mbid, or neither")
        return builder.by(link, mbid)

    def search(
        self, record_type: type[T], query: SearchQuery | str | None = None
    ) -> RequestBuilder[T]:
        builder = RequestBuilder(record_type=record_type, executor=self)
        return builder.query(query) if query is not None else builder


class MusicBrainzClient(_BuilderFactory):
    """Blocking client.

    Example:
        with MusicBrainzClient(ClientConfig(app_name="demo", app_version="1.0")) as mb:
            artist = mb.fetch(Artist, mbid).with_recordings().execute()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: requests.Session | None = None,
        limiter: RateLimiter | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        _check_mode(self.config, ExecutionMode.BLOCKING, "MusicBrainzClient")
        self._transport = MusicBrainzHTTPClient(
            self.config, session=session, limiter=limiter, clock=clock
        )

    @property
    def user_agent(self) -> str:
        return self._transport.user_agent

    @property
    def limiter(self) -> RateLimiter | None:
        return self._transport.limiter

    def execute(
        self, request: RequestBuilder[T], *, trace: RequestTrace | None = None
    ) -> T | BrowseResult[T] | SearchResult[T]:
        """Build ``request`` and run it, returning a record or a result page."""

        descriptor = request.build()
        return self._transport.execute(descriptor, request.record_type, trace=trace)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> MusicBrainzClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class AsyncMusicBrainzClient(_BuilderFactory):
    """Suspending client; ``execute`` returns a coroutine."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        limiter: AsyncRateLimiter | None = None,
        clock: AsyncClock | None = None,
    ) -> None:
        self.config = config or ClientConfig(mode=ExecutionMode.ASYNC)
        _check_mode(self.config, ExecutionMode.ASYNC, "AsyncMusicBrainzClient")
        self._transport = AsyncMusicBrainzHTTPClient(
            self.config, client=client, limiter=limiter, clock=clock
        )

    @property
    def user_agent(self) -> str:
        return self._transport.user_agent

    @property
    def limiter(self) -> AsyncRateLimiter | None:
        return self._transport.limiter

    async def execute(
        self, request: RequestBuilder[T], *, trace: RequestTrace | None = None
    ) -> T | BrowseResult[T] | SearchResult[T]:
        descriptor = request.build()
        return await self._transport.execute(descriptor, request.record_type, trace=trace)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> AsyncMusicBrainzClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def create_client(
    config: ClientConfig | None = None, **kwargs: Any
) -> MusicBrainzClient | AsyncMusicBrainzClient:
    """Construct the client matching ``config.mode``.

    Extra keyword arguments go to the client constructor (``session`` for
    blocking clients, ``client`` for asynchronous ones, ``limiter``, ``clock``).
    """

    resolved = config or ClientConfig()
    if resolved.mode is ExecutionMode.ASYNC:
        return AsyncMusicBrainzClient(resolved, **kwargs)
    return MusicBrainzClient(resolved, **kwargs)


__all__ = ["AsyncMusicBrainzClient", "MusicBrainzClient", "create_client"]
