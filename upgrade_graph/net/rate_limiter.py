"""
Upgrade Graph Repository
Introductory remarks: This module is part of the upgrade-graph codebase.

Token-bucket pacing for outbound graph requests.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Optional


class RateLimiter:
    """Allow at most ``max_calls`` acquisitions per ``period_seconds``.

    The bucket starts full. Every :meth:`acquire` takes one token and blocks
    until a token has been refilled when the bucket is empty. Graph traversal
    is sequential, so the limiter keeps no lock.
    """

    def __init__(
        self,
        max_calls: int,
        period_seconds: float,
        *,
        time_fn: Optional[Callable[[], float]] = None,
        sleep_fn: Optional[Callable[[float], None]] = None,
    ) -> None:
        if max_calls <= 0:
            raise ValueError("max_calls must be positive.")
        if period_seconds <= 0:
            raise ValueError("period_seconds must be positive.")

        self._capacity = float(max_calls)
        self._seconds_per_token = float(period_seconds) / self._capacity
        self._time_fn = time_fn or time.monotonic
        self._sleep_fn = sleep_fn or time.sleep

        self._tokens = self._capacity
        self._updated_at = self._time_fn()

    @property
    def available_tokens(self) -> float:
        return self._tokens

    def acquire(self) -> None:
        """Block until a token is available, then consume it."""
        while True:
            self._refill(self._time_fn())
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return
            self._sleep_fn((1.0 - self._tokens) * self._seconds_per_token)

    def _refill(self, now: float) -> None:
        elapsed = now - self._updated_at
        if elapsed <= 0:
            return
        self._tokens = min(
            self._capacity,
            self._tokens + elapsed / self._seconds_per_token,
        )
        self._updated_at = now
