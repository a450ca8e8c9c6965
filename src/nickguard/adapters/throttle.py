"""Outbound flood control: token bucket."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable


class TokenBucket:
    """Allows ``capacity`` sends in a burst, refilled at ``rate`` tokens per second."""

    def __init__(
        self,
        capacity: int,
        rate: float = 1.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1 or rate <= 0:
            raise ValueError("capacity must be >= 1 and rate > 0")
        self._capacity = capacity
        self._rate = rate
        self._clock = clock
        self._tokens = float(capacity)
        self._stamp = clock()

    @property
    def tokens(self) -> float:
        self._top_up()
        return self._tokens

    def delay(self) -> float:
        """Seconds until one token is available; 0.0 when one is available now."""
        self._top_up()
        if self._tokens >= 1:
            return 0.0
        return (1 - self._tokens) / self._rate

    def try_take(self) -> bool:
        """Take a token if one is available."""
        self._top_up()
        if self._tokens < 1:
            return False
        self._tokens -= 1
        return True

    async def take(self) -> None:
        """Wait for a token, then take it."""
        while not self.try_take():
            await asyncio.sleep(self.delay())

    def _top_up(self) -> None:
        now = self._clock()
        self._tokens = min(self._capacity, self._tokens + (now - self._stamp) * self._rate)
        self._stamp = now
