"""Fingerprint deduplication cache.

Suppresses repeats of the same error shape inside a short time window.
Capacity is bounded with FIFO-by-insertion eviction.
"""

from collections import OrderedDict
from typing import Dict, Optional

from loguru import logger

from rootly_runtime.constants import DedupConfig


class DeduplicationCache:
    """
    Bounded mapping of fingerprint -> last accepted timestamp (ms).

    Eviction is strict FIFO over insertion order, NOT LRU: re-accepting a
    resident fingerprint after the window overwrites its timestamp but keeps
    its original slot, and suppressed lookups never touch ordering. A
    fingerprint that was evicted and comes back is a fresh insertion at the end.
    """

    def __init__(
        self,
        window_ms: int = DedupConfig.WINDOW_MS,
        max_entries: int = DedupConfig.MAX_FINGERPRINTS,
    ):
        """
        Initialize deduplication cache.

        Args:
            window_ms: Suppression window in milliseconds
            max_entries: Maximum resident fingerprints
        """
        self.window_ms = window_ms
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, float]" = OrderedDict()

    def should_suppress(self, fingerprint: str, now: float) -> bool:
        """
        Check a fingerprint and record it when accepted.

        Args:
            fingerprint: Error fingerprint
            now: Current time in milliseconds

        Returns:
            True if the error is a duplicate inside the window
        """
        last_seen = self._entries.get(fingerprint)
        if last_seen is not None and now - last_seen < self.window_ms:
            logger.debug("Duplicate error suppressed")
            return True

        # Assignment to an existing key keeps its insertion slot
        self._entries[fingerprint] = now

        if len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Fingerprint cache full, evicted oldest entry: {evicted[:80]}")

        return False

    def last_seen(self, fingerprint: str) -> Optional[float]:
        """Get the last accepted timestamp for a fingerprint."""
        return self._entries.get(fingerprint)

    def oldest(self) -> Optional[str]:
        """Get the fingerprint that will be evicted next."""
        return next(iter(self._entries), None)

    def get_stats(self, now: float) -> Dict[str, int]:
        """Get cache statistics."""
        active = sum(1 for ts in self._entries.values() if now - ts < self.window_ms)
        return {
            "total_entries": len(self._entries),
            "active_entries": active,
            "max_entries": self.max_entries,
            "window_ms": self.window_ms,
        }

    def clear(self) -> None:
        """Clear all cache entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries
