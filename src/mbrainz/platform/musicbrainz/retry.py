"""Where: src/mbrainz/platform/musicbrainz/retry.py
What: Retry policy, request tracing, and the per-attempt cycle shared by both transports.
Why: Status classification, backoff, tracing, and decoding must behave the
     same in both execution modes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Final, Generic, TypeVar

from mbrainz.config.settings import ClientConfig
from mbrainz.errors import (
    ApiError,
    DeserializationError,
    MusicBrainzError,
    RateLimitedError,
    TransportError,
)
from mbrainz.features.request import RequestDescriptor
from mbrainz.platform.logging import logger
from mbrainz.shared.codec import SchemaError, decode
from mbrainz.shared.entities import Entity
from mbrainz.shared.kinds import Operation
from mbrainz.shared.results import BrowseResult, SearchResult

T = TypeVar("T", bound=Entity)

THROTTLE_STATUSES: Final[frozenset[int]] = frozenset({429, 503})


class RequestState(str, Enum):
    """Lifecycle of one request."""

    PENDING = "pending"
    WAITING = "waiting"
    DISPATCHED = "dispatched"
    THROTTLED = "throttled"
    SUCCESS = "success"
    FAILED = "failed"
    RATE_LIMITED = "rate_limited"


TERMINAL_STATES: Final[frozenset[RequestState]] = frozenset(
    {RequestState.SUCCESS, RequestState.FAILED, RequestState.RATE_LIMITED}
)


@dataclass(slots=True)
class RequestTrace:
    """Record of the states a request went through and the delays it waited."""

    states: list[RequestState] = field(default_factory=lambda: [RequestState.PENDING])
    retries: int = 0
    delays: list[float] = field(default_factory=list)

    @property
    def state(self) -> RequestState:
        return self.states[-1]

    @property
    def attempts(self) -> int:
        return self.states.count(RequestState.DISPATCHED)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def transition(self, state: RequestState) -> None:
        self.states.append(state)

    def record_retry(self, delay: float) -> None:
        self.retries += 1
        self.delays.append(delay)


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How throttling responses are retried.

    Attributes:
        max_retries: Retries allowed after the first attempt.
        default_backoff: Delay used when the server gives no ``Retry-After``.
        max_backoff: Upper bound for any delay.
    """

    max_retries: int = 5
    default_backoff: float = 1.0
    max_backoff: float = 60.0

    @classmethod
    def from_config(cls, config: ClientConfig) -> RetryPolicy:
        return cls(
            max_retries=config.max_retries,
            default_backoff=config.default_backoff,
            max_backoff=config.max_backoff,
        )

    def exhausted(self, trace: RequestTrace) -> bool:
        return trace.retries >= self.max_retries

    def delay_for(self, headers: Mapping[str, str]) -> float:
        return backoff_delay(
            headers, default=self.default_backoff, maximum=self.max_backoff
        )


def is_throttled(status: int) -> bool:
    return status in THROTTLE_STATUSES


def is_success(status: int) -> bool:
    return 200 <= status < 300


def parse_retry_after(value: str | None, *, now: datetime | None = None) -> float | None:
    """Parse ``Retry-After`` given as delta-seconds or an HTTP date."""

    if not value:
        return None
    stripped = value.strip()
    if stripped.isdigit():
        return float(int(stripped))
    try:
        dt = parsedate_to_datetime(stripped)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    reference = now or datetime.now(timezone.utc)
    delta = (dt - reference).total_seconds()
    return max(0.0, delta)


def backoff_delay(headers: Mapping[str, str], *, default: float, maximum: float) -> float:
    """Delay before retrying a throttled request, clamped to ``[0, maximum]``."""

    retry_after = parse_retry_after(headers.get("Retry-After"))
    delay = default if retry_after is None else retry_after
    return max(0.0, min(maximum, delay))


def raise_for_status(status: int, body: str, url: str) -> None:
    if not is_success(status):
        raise ApiError(status, body, url=url)


def decode_body(
    descriptor: RequestDescriptor,
    record_type: type[T],
    body: str,
    *,
    legacy: bool = False,
) -> T | BrowseResult[T] | SearchResult[T]:
    """Decode a 2xx body into the shape the operation returns.

    Raises:
        DeserializationError: The body is not JSON or does not fit the schema.
    """
    try:
        payload: Any = json.loads(body)
    except ValueError as exc:
        raise DeserializationError(f"Response is not valid JSON: {exc}", raw_body=body) from exc

    try:
        if descriptor.operation is Operation.BROWSE:
            return BrowseResult.from_json(record_type, payload, legacy=legacy)
        if descriptor.operation is Operation.SEARCH:
            return SearchResult.from_json(record_type, payload, legacy=legacy)
        return decode(record_type, payload, legacy=legacy)
    except SchemaError as exc:
        raise DeserializationError(
            f"Response does not match {record_type.__name__}: {exc}", raw_body=body
        ) from exc


class RequestCycle(Generic[T]):
    """State changes and log events for one request across its attempts.

    Transports own the I/O; they call into the cycle around every permit
    wait, dispatch and response so both execution modes report the same
    trace and the same ``mb_event`` records.
    """

    def __init__(
        self,
        descriptor: RequestDescriptor,
        base_url: str,
        policy: RetryPolicy,
        trace: RequestTrace | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.policy = policy
        self.trace = trace if trace is not None else RequestTrace()
        self.url = descriptor.url(base_url)
        self._event: dict[str, Any] = {"method": descriptor.method, "url": self.url}

    def waiting(self) -> None:
        self.trace.transition(RequestState.WAITING)

    def dispatched(self) -> None:
        self.trace.transition(RequestState.DISPATCHED)
        logger.debug(
            "MusicBrainz %s %s",
            self.descriptor.method,
            self.url,
            extra={"mb_event": "request.dispatch", "attempt": self.trace.attempts, **self._event},
        )

    def transport_failed(self, exc: Exception) -> TransportError:
        """Record a connectivity failure and return the error to raise."""

        error = TransportError(f"MusicBrainz request failed: {exc}", url=self.url)
        self._failed(error)
        return error

    def throttled(self, status: int, headers: Mapping[str, str]) -> float:
        """Record a throttling response and return the delay before retrying.

        Raises:
            RateLimitedError: The retry budget is spent.
        """
        self.trace.transition(RequestState.THROTTLED)
        if self.policy.exhausted(self.trace):
            self.trace.transition(RequestState.RATE_LIMITED)
            logger.warning(
                "MusicBrainz throttling persisted (status=%s). Giving up.",
                status,
                extra={"mb_event": "request.rate_limited", "status": status, **self._event},
            )
            raise RateLimitedError(self.url, self.trace.attempts)

        delay = self.policy.delay_for(headers)
        self.trace.record_retry(delay)
        logger.info(
            "MusicBrainz throttled (status=%s). Retrying in %.1fs.",
            status,
            delay,
            extra={
                "mb_event": "request.throttled",
                "status": status,
                "delay": delay,
                "attempt": self.trace.attempts,
                **self._event,
            },
        )
        return delay

    def finish(
        self, status: int, body: str, record_type: type[T], *, legacy: bool = False
    ) -> T | BrowseResult[T] | SearchResult[T]:
        """Check the status, decode the body and close the trace."""

        try:
            raise_for_status(status, body, self.url)
            result = decode_body(self.descriptor, record_type, body, legacy=legacy)
        except MusicBrainzError as exc:
            self._failed(exc, status=status)
            raise
        self.trace.transition(RequestState.SUCCESS)
        logger.debug(
            "MusicBrainz %s %s -> %s",
            self.descriptor.method,
            self.url,
            status,
            extra={"mb_event": "request.success", "status": status, **self._event},
        )
        return result

    def _failed(self, error: MusicBrainzError, *, status: int | None = None) -> None:
        self.trace.transition(RequestState.FAILED)
        logger.warning(
            "MusicBrainz request failed: %s",
            error,
            extra={
                "mb_event": "request.failed",
                "status": status,
                "error_message": str(error),
                **self._event,
            },
        )


__all__ = [
    "RequestCycle",
    "RequestState",
    "RequestTrace",
    "RetryPolicy",
    "TERMINAL_STATES",
    "THROTTLE_STATUSES",
    "backoff_delay",
    "decode_body",
    "is_success",
    "is_throttled",
    "parse_retry_after",
    "raise_for_status",
]
