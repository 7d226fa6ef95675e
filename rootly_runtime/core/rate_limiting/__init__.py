"""Rate limiting for the capture pipeline."""

from .sliding_window import SlidingWindowRateLimiter

__all__ = ["SlidingWindowRateLimiter"]
