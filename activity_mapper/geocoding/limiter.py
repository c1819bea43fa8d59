from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol

from ..constants import GEOCODE_RATE_CAPACITY, GEOCODE_RATE_WINDOW_SECONDS

"""Token bucket rate limiter for outbound geocode requests.

try_acquire() never blocks: callers treat a denial as retryable and decide
how long to wait themselves (see services.addresses.geocode_address).
"""

__all__ = [
    "RateLimiter",
    "TokenBucket",
]


class RateLimiter(Protocol):
    def try_acquire(self) -> bool: ...


class TokenBucket:
    """Bucket of `capacity` tokens refilled continuously over `window_seconds`."""

    def __init__(
        self,
        capacity: int = GEOCODE_RATE_CAPACITY,
        window_seconds: float = GEOCODE_RATE_WINDOW_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.capacity = capacity
        self.window_seconds = window_seconds
        self._clock = clock
        self._tokens = float(capacity)
        self._updated = clock()

    @property
    def tokens(self) -> float:
        self._refill()
        return self._tokens

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated)
        self._updated = now
        rate = self.capacity / self.window_seconds
        self._tokens = min(float(self.capacity), self._tokens + elapsed * rate)

    def try_acquire(self) -> bool:
        """Take one token if available."""
        self._refill()
        if self._tokens >= 1.0:
            self._tokens -= 1.0
            return True
        return False
