"""Constants and tunables for rootly-runtime.

All classes can be imported directly from this package:
    from rootly_runtime.constants import DedupConfig, RateLimits, TransportConfig
"""

# Capture pipeline
from .capture import (
    DedupConfig,
    PayloadDefaults,
    RateLimits,
    RegistryConfig,
)

# Transport
from .transport import TransportConfig

__all__ = [
    # Capture pipeline
    "DedupConfig",
    "RateLimits",
    "RegistryConfig",
    "PayloadDefaults",
    # Transport
    "TransportConfig",
]
