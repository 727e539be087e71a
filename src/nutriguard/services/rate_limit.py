"""Request spacing for the model endpoint."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Time source used for throttling and backoff."""

    def now(self) -> float:
        """Return a monotonic timestamp in seconds."""

    async def sleep(self, seconds: float) -> None:
        """Suspend the caller for the given number of seconds."""


@dataclass
class MonotonicClock(Clock):
    """Clock backed by ``time.monotonic`` and ``asyncio.sleep``."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class RateLimiter:
    """Keeps outbound requests at least ``min_interval_seconds`` apart.

    Callers queue on an asyncio lock, so concurrent requests are released
    one interval after another rather than racing past the window.
    """

    def __init__(
        self, min_interval_seconds: float = 1.0, clock: Clock | None = None
    ) -> None:
        self.min_interval_seconds = min_interval_seconds
        self.clock = clock or MonotonicClock()
        self._last_request_at: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_request_at(self) -> float | None:
        return self._last_request_at

    async def acquire(self) -> None:
        """Wait until the next request window opens, then claim it."""
        async with self._lock:
            if self._last_request_at is not None:
                elapsed = self.clock.now() - self._last_request_at
                wait = self.min_interval_seconds - elapsed
                if wait > 0:
                    _logger.debug("Throttling model request for %.2fs", wait)
                    await self.clock.sleep(wait)
            self._last_request_at = self.clock.now()
