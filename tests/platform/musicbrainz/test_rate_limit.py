"""Tests for the client-scoped rate limiter, driven by a fake clock."""

from __future__ import annotations

import asyncio
import threading
from typing import Any

import pytest

from mbrainz.platform.musicbrainz import AsyncRateLimiter, RateLimiter, RateLimitState


def test_n_requests_take_at_least_n_minus_one_intervals(fake_clock: Any) -> None:
    limiter = RateLimiter(1.0, clock=fake_clock)
    start = fake_clock.monotonic()

    permits = [limiter.acquire() for _ in range(5)]

    assert fake_clock.monotonic() - start >= 4.0
    assert [permit.scheduled_at - start for permit in permits] == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_first_permit_is_immediate(fake_clock: Any) -> None:
    permit = RateLimiter(1.0, clock=fake_clock).acquire()

    assert permit.wait == 0.0
    assert permit.sequence == 1
    assert fake_clock.sleeps == []


def test_idle_time_is_not_banked(fake_clock: Any) -> None:
    """After a long pause only ``burst`` requests go out back to back."""

    limiter = RateLimiter(1.0, clock=fake_clock)
    _ = limiter.acquire()
    fake_clock.now += 30.0

    _ = limiter.acquire()
    second = limiter.acquire()

    assert second.wait == pytest.approx(1.0)


def test_burst_allows_back_to_back_permits(fake_clock: Any) -> None:
    limiter = RateLimiter(1.0, burst=3, clock=fake_clock)
    start = fake_clock.monotonic()

    waits = [limiter.acquire().wait for _ in range(5)]

    assert waits == [0.0, 0.0, 0.0, 1.0, 1.0]
    assert fake_clock.monotonic() - start == pytest.approx(2.0)


def test_penalize_pushes_next_slot(fake_clock: Any) -> None:
    limiter = RateLimiter(1.0, clock=fake_clock)
    _ = limiter.acquire()

    limiter.penalize(7.5)
    permit = limiter.acquire()

    assert permit.wait == pytest.approx(7.5)


def test_penalize_never_moves_slot_backwards(fake_clock: Any) -> None:
    limiter = RateLimiter(5.0, clock=fake_clock)
    _ = limiter.acquire()

    limiter.penalize(0.5)

    assert limiter.state.next_allowed(fake_clock.monotonic()) == pytest.approx(
        fake_clock.monotonic() + 5.0
    )


def test_limiters_do_not_share_state(fake_clock: Any) -> None:
    first = RateLimiter(1.0, clock=fake_clock)
    second = RateLimiter(1.0, clock=fake_clock)
    _ = first.acquire()

    assert second.acquire().wait == 0.0


def test_state_rejects_bad_parameters() -> None:
    with pytest.raises(ValueError):
        _ = RateLimitState(0)
    with pytest.raises(ValueError):
        _ = RateLimitState(1.0, burst=0)


def test_concurrent_reservations_get_distinct_slots() -> None:
    """Threads racing for permits never receive the same slot."""

    state = RateLimitState(1.0)
    slots: list[float] = []
    lock = threading.Lock()

    def reserve() -> None:
        permit = state.reserve(0.0)
        with lock:
            slots.append(permit.scheduled_at)

    threads = [threading.Thread(target=reserve) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(slots) == [float(i) for i in range(20)]
    assert state.issued == 20


@pytest.mark.asyncio
async def test_async_limiter_spaces_requests(fake_async_clock: Any) -> None:
    limiter = AsyncRateLimiter(1.0, clock=fake_async_clock)

    for _ in range(3):
        _ = await limiter.acquire()

    assert fake_async_clock.sleeps == [1.0, 1.0]


@pytest.mark.asyncio
async def test_async_limiter_penalize(fake_async_clock: Any) -> None:
    limiter = AsyncRateLimiter(1.0, clock=fake_async_clock)
    _ = await limiter.acquire()

    limiter.penalize(3.0)
    permit = await limiter.acquire()

    assert permit.wait == pytest.approx(3.0)


class StalledAsyncClock:
    """Async clock whose sleep never returns on its own."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeping = asyncio.Event()

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeping.set()
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_cancelled_wait_keeps_its_permit() -> None:
    clock = StalledAsyncClock()
    limiter = AsyncRateLimiter(1.0, clock=clock)
    _ = await limiter.acquire()

    waiter = asyncio.create_task(limiter.acquire())
    await clock.sleeping.wait()
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert limiter.state.issued == 2
    following = limiter.state.reserve(clock.monotonic())
    assert following.sequence == 3
    assert following.scheduled_at == pytest.approx(102.0)
