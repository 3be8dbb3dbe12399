"""
Per-minute request budget with a minimum spacing between requests.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from ..config import settings

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
# Margin past the minute boundary before the budget is considered fresh.
ROLLOVER_MARGIN = 1.0


class RateLimiter:
    """
    Limits request starts to ``limit`` per clock minute.

    When the budget for the current minute is spent, ``wait()`` suspends
    the caller until the next minute boundary plus a one second margin.
    Otherwise it only enforces ``min_interval`` since the previous request.
    Concurrent callers are serialized so the counter never skips.
    """

    def __init__(
        self,
        limit: int | None = None,
        min_interval: float | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.limit = settings.rate_limit_per_minute if limit is None else limit
        self.min_interval = (
            settings.min_request_interval if min_interval is None else min_interval
        )
        if self.limit < 1:
            raise ValueError("Rate limit must allow at least one request per minute")

        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._current_minute: int | None = None
        self._counter = 0
        self._last_request: float | None = None

        # Statistics
        self.total_waits = 0
        self.total_wait_seconds = 0.0

    @property
    def counter(self) -> int:
        return self._counter

    async def wait(self) -> None:
        """Suspend the calling task until it may issue its next request."""
        async with self._lock:
            now = self._clock()
            minute = int(now // SECONDS_PER_MINUTE)
            if minute != self._current_minute:
                self._current_minute = minute
                self._counter = 0

            self._counter += 1
            if self._counter > self.limit:
                delay = SECONDS_PER_MINUTE - (now % SECONDS_PER_MINUTE) + ROLLOVER_MARGIN
                logger.info(
                    f"Rate limit of {self.limit}/min reached, waiting {delay:.1f}s"
                )
                await self._pause(delay)
                self._current_minute = int(self._clock() // SECONDS_PER_MINUTE)
                self._counter = 1
            elif self._last_request is not None and self.min_interval > 0:
                elapsed = now - self._last_request
                if elapsed < self.min_interval:
                    await self._pause(self.min_interval - elapsed)

            self._last_request = self._clock()

    async def _pause(self, seconds: float) -> None:
        self.total_waits += 1
        self.total_wait_seconds += seconds
        await self._sleep(seconds)
