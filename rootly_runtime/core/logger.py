"""Debug logging with Loguru.

Library records are disabled by default so a host's own Loguru sinks stay
quiet. Debug mode enables them and routes them to a dedicated stderr sink.
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

PACKAGE_NAME = "rootly_runtime"
DEBUG_FORMAT = "[Rootly SDK] {message}"

__all__ = ["PACKAGE_NAME", "DEBUG_FORMAT", "set_debug_mode", "is_debug_mode"]

_debug_sink_id: Optional[int] = None


def _package_filter(record: Dict[str, Any]) -> bool:
    """Only pass records emitted from this package."""
    name = record["name"] or ""
    return name == PACKAGE_NAME or name.startswith(f"{PACKAGE_NAME}.")


def set_debug_mode(enabled: bool, sink: Any = None) -> None:
    """
    Toggle debug logging for the capture pipeline.

    Args:
        enabled: Whether debug records should be emitted
        sink: Loguru sink for debug records (default: sys.stderr)
    """
    global _debug_sink_id

    if _debug_sink_id is not None:
        try:
            logger.remove(_debug_sink_id)
        except ValueError:
            # Sink already removed by the host (e.g. logger.remove())
            pass
        _debug_sink_id = None

    if not enabled:
        logger.disable(PACKAGE_NAME)
        return

    logger.enable(PACKAGE_NAME)
    _debug_sink_id = logger.add(
        sink if sink is not None else sys.stderr,
        format=DEBUG_FORMAT,
        level="DEBUG",
        filter=_package_filter,
        colorize=False,
    )


def is_debug_mode() -> bool:
    """Check whether the debug sink is installed."""
    return _debug_sink_id is not None
