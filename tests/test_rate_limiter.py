"""Tests for request spacing."""

import asyncio

from nutriguard.services.rate_limit import RateLimiter
from tests.conftest import FakeClock


def test_first_request_is_not_delayed(fake_clock: FakeClock) -> None:
    limiter = RateLimiter(min_interval_seconds=1.0, clock=fake_clock)

    asyncio.run(limiter.acquire())

    assert fake_clock.sleeps == []
    assert limiter.last_request_at == 100.0


def test_back_to_back_requests_wait_out_the_interval(fake_clock: FakeClock) -> None:
    limiter = RateLimiter(min_interval_seconds=1.0, clock=fake_clock)

    async def scenario() -> None:
        await limiter.acquire()
        fake_clock.current += 0.25
        await limiter.acquire()

    asyncio.run(scenario())

    assert fake_clock.sleeps == [0.75]
    assert limiter.last_request_at == 101.0


def test_no_wait_after_interval_elapsed(fake_clock: FakeClock) -> None:
    limiter = RateLimiter(min_interval_seconds=1.0, clock=fake_clock)

    async def scenario() -> None:
        await limiter.acquire()
        fake_clock.current += 5.0
        await limiter.acquire()

    asyncio.run(scenario())

    assert fake_clock.sleeps == []


def test_concurrent_callers_are_released_one_interval_apart(
    fake_clock: FakeClock,
) -> None:
    limiter = RateLimiter(min_interval_seconds=1.0, clock=fake_clock)
    released: list[float] = []

    async def caller() -> None:
        await limiter.acquire()
        released.append(fake_clock.now())

    async def scenario() -> None:
        await asyncio.gather(caller(), caller(), caller())

    asyncio.run(scenario())

    assert released == [100.0, 101.0, 102.0]
    assert fake_clock.sleeps == [1.0, 1.0]
