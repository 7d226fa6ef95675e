"""Capture pipeline services."""

from .capture import CapturedError, CapturedErrorRegistry, CaptureOrchestrator
from .deduplication import DeduplicationCache
from .transport import SETTLED, SettledDelivery, Transport

__all__ = [
    "CaptureOrchestrator",
    "CapturedError",
    "CapturedErrorRegistry",
    "DeduplicationCache",
    "Transport",
    "SettledDelivery",
    "SETTLED",
]
