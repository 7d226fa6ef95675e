"""Capture pipeline configuration (deduplication, rate limits, recursion guard)."""

from typing import Final


class DedupConfig:
    """Fingerprint deduplication configuration."""

    WINDOW_MS: Final[int] = 10_000
    MAX_FINGERPRINTS: Final[int] = 500
    UNKNOWN_FINGERPRINT: Final[str] = "unknown"


class RateLimits:
    """Accepted-error rate limiting configuration."""

    MAX_ERRORS: Final[int] = 20
    WINDOW_MS: Final[int] = 60_000


class RegistryConfig:
    """Recursive-capture registry configuration."""

    # Only for objects without an instance __dict__
    MAX_FALLBACK_ENTRIES: Final[int] = 100


class PayloadDefaults:
    """Fallback values used when building an error payload."""

    MESSAGE: Final[str] = "Unknown error"
    FINGERPRINT_MESSAGE: Final[str] = "Unknown"
    ERROR_TYPE: Final[str] = "Error"
    STACK: Final[str] = "No stack trace available"
