"""Sliding-window limiter capping accepted error reports."""

from collections import deque
from typing import Deque, Dict

from loguru import logger

from rootly_runtime.constants import RateLimits


class SlidingWindowRateLimiter:
    """
    Cap accepted errors per trailing time window, independent of fingerprint.

    Timestamps are appended in call order, so the deque stays sorted and
    expired entries are always at the front. The capture path is synchronous
    on a single event loop thread, so no lock is held.
    """

    def __init__(
        self, max_errors: int = RateLimits.MAX_ERRORS, window_ms: int = RateLimits.WINDOW_MS
    ):
        """
        Initialize rate limiter.

        Args:
            max_errors: Maximum accepted errors per window
            window_ms: Window length in milliseconds
        """
        self.max_errors = max_errors
        self.window_ms = window_ms
        self.timestamps: Deque[float] = deque()

    def _prune(self, now: float) -> None:
        cutoff = now - self.window_ms
        while self.timestamps and self.timestamps[0] < cutoff:
            self.timestamps.popleft()

    def should_limit(self, now: float) -> bool:
        """
        Record an acceptance at ``now`` unless the window is full.

        Args:
            now: Current time in milliseconds

        Returns:
            True if the error must be dropped (nothing is recorded)
        """
        self._prune(now)

        if len(self.timestamps) >= self.max_errors:
            logger.debug("Rate limit exceeded")
            return True

        self.timestamps.append(now)
        return False

    def get_stats(self, now: float) -> Dict[str, float]:
        """Get rate limiter statistics."""
        self._prune(now)
        accepted = len(self.timestamps)
        return {
            "accepted_in_window": accepted,
            "max_errors": self.max_errors,
            "window_ms": self.window_ms,
            "available": max(0, self.max_errors - accepted),
        }

    def clear(self) -> None:
        """Forget all recorded acceptances."""
        self.timestamps.clear()
