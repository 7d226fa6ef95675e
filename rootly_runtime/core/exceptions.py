"""Internal exception classes for rootly-runtime.

These never reach the host application: every stage of the capture pipeline
catches them and degrades to a no-op.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class RootlyRuntimeError(Exception):
    """Base exception for rootly-runtime."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize runtime error.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class ConfigurationError(RootlyRuntimeError):
    """Invalid init options."""

    def __init__(self, message: str = "Invalid configuration", field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, details)
        self.field = field


class InvalidCollectorUrlError(RootlyRuntimeError):
    """Collector URL cannot be used for delivery."""

    def __init__(self, url: str, reason: str = "malformed URL"):
        super().__init__(f"Invalid collector URL {url!r}: {reason}", {"url": url})
        self.url = url

