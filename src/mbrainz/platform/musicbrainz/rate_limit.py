"""Where: src/mbrainz/platform/musicbrainz/rate_limit.py
What: Client-scoped request spacing for MusicBrainz WS2 calls.
Why: MusicBrainz asks clients to limit traffic to roughly 1 request per second.

The gate follows the generic cell rate algorithm: each permit advances a
theoretical arrival time by one interval and callers sleep until their slot.
Reservations are taken under a lock that is never held while sleeping, so
concurrent callers are served in reservation order.
"""

from __future__ import annotations

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Final, Protocol


class Clock(Protocol):
    """Time source used by the blocking limiter."""

    def monotonic(self) -> float:
        ...

    def sleep(self, seconds: float) -> None:
        ...


class AsyncClock(Protocol):
    """Time source used by the asynchronous limiter."""

    def monotonic(self) -> float:
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class AsyncSystemClock:
    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


@dataclass(frozen=True, slots=True)
class Permit:
    """Authorization to dispatch one request.

    Attributes:
        sequence: 1-based reservation number.
        scheduled_at: Monotonic time at which the request may be sent.
        wait: Seconds the caller had to wait for the slot.
    """

    sequence: int
    scheduled_at: float
    wait: float


class RateLimitState:
    """Shared spacing state; only mutated while holding its lock."""

    def __init__(self, interval: float = 1.0, burst: int = 1) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.interval: Final[float] = interval
        self.burst: Final[int] = burst
        self._lock: Final[threading.Lock] = threading.Lock()
        self._tat: float | None = None
        self._issued: int = 0

    @property
    def _tolerance(self) -> float:
        return (self.burst - 1) * self.interval

    @property
    def issued(self) -> int:
        with self._lock:
            return self._issued

    def next_allowed(self, now: float) -> float:
        """Earliest monotonic time at which a new reservation would be granted."""

        with self._lock:
            if self._tat is None:
                return now
            return max(now, self._tat - self._tolerance)

    def reserve(self, now: float) -> Permit:
        with self._lock:
            tat = now if self._tat is None else max(self._tat, now)
            scheduled = max(now, tat - self._tolerance)
            self._tat = tat + self.interval
            self._issued += 1
            return Permit(sequence=self._issued, scheduled_at=scheduled, wait=scheduled - now)

    def penalize(self, now: float, delay: float) -> None:
        """Hold every later reservation until ``now + delay`` at the earliest."""

        with self._lock:
            floor = now + max(0.0, delay) + self._tolerance
            self._tat = floor if self._tat is None else max(self._tat, floor)


class RateLimiter:
    """Blocking gate; :meth:`acquire` sleeps the calling thread until its slot."""

    def __init__(
        self,
        interval: float = 1.0,
        burst: int = 1,
        *,
        clock: Clock | None = None,
        state: RateLimitState | None = None,
    ) -> None:
        self.state: Final[RateLimitState] = state or RateLimitState(interval, burst)
        self.clock: Final[Clock] = clock or SystemClock()

    def acquire(self) -> Permit:
        permit = self.state.reserve(self.clock.monotonic())
        if permit.wait > 0:
            self.clock.sleep(permit.wait)
        return permit

    def penalize(self, delay: float) -> None:
        self.state.penalize(self.clock.monotonic(), delay)


class AsyncRateLimiter:
    """Suspending gate for event-loop callers.

    A permit is consumed at reservation time; a task cancelled while waiting
    for its slot still counts against the budget.
    """

    def __init__(
        self,
        interval: float = 1.0,
        burst: int = 1,
        *,
        clock: AsyncClock | None = None,
        state: RateLimitState | None = None,
    ) -> None:
        self.state: Final[RateLimitState] = state or RateLimitState(interval, burst)
        self.clock: Final[AsyncClock] = clock or AsyncSystemClock()

    async def acquire(self) -> Permit:
        permit = self.state.reserve(self.clock.monotonic())
        if permit.wait > 0:
            await self.clock.sleep(permit.wait)
        return permit

    def penalize(self, delay: float) -> None:
        self.state.penalize(self.clock.monotonic(), delay)


__all__ = [
    "AsyncClock",
    "AsyncRateLimiter",
    "AsyncSystemClock",
    "Clock",
    "Permit",
    "RateLimitState",
    "RateLimiter",
    "SystemClock",
]
