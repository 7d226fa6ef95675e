"""Error capture pipeline: recursion guard, deduplication, rate limiting, delivery."""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from loguru import logger

from rootly_runtime.constants import RegistryConfig
from rootly_runtime.core.rate_limiting import SlidingWindowRateLimiter
from rootly_runtime.models.payload import ErrorPayload, Severity
from rootly_runtime.services.deduplication import DeduplicationCache
from rootly_runtime.services.transport import SETTLED, Transport
from rootly_runtime.utils.fingerprint import fingerprint

CAPTURE_RECORD_ATTR = "__rootly_capture__"


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000


@dataclass
class CapturedError:
    """Capture record for an exception that entered the pipeline."""

    original_error: BaseException
    captured: bool = False


class CapturedErrorRegistry:
    """
    Capture records for errors that entered the pipeline.

    The record is kept in the exception's instance ``__dict__`` under
    ``CAPTURE_RECORD_ATTR``, so it lives exactly as long as the error and is
    never evicted. The error's args, message and traceback are left untouched.
    Objects without an instance dict fall back to a bounded identity map with
    FIFO eviction.
    """

    def __init__(self, max_fallback_entries: int = RegistryConfig.MAX_FALLBACK_ENTRIES):
        self.max_fallback_entries = max_fallback_entries
        self._fallback: "OrderedDict[int, CapturedError]" = OrderedDict()

    @staticmethod
    def _instance_dict(error: Any) -> Optional[Dict[str, Any]]:
        try:
            state = vars(error)
        except TypeError:
            return None
        return state if isinstance(state, dict) else None

    def get(self, error: BaseException) -> Optional[CapturedError]:
        """Get the record for this exact error object, if any."""
        state = self._instance_dict(error)
        if state is not None:
            record = state.get(CAPTURE_RECORD_ATTR)
        else:
            record = self._fallback.get(id(error))
        # Copies of an exception share its __dict__ contents, not its identity
        if isinstance(record, CapturedError) and record.original_error is error:
            return record
        return None

    def is_captured(self, error: BaseException) -> bool:
        record = self.get(error)
        return record is not None and record.captured

    def mark(self, error: BaseException) -> CapturedError:
        """Mark an error as captured, creating its record on first sight."""
        record = self.get(error)
        if record is None:
            record = CapturedError(original_error=error)
            state = self._instance_dict(error)
            if state is not None:
                state[CAPTURE_RECORD_ATTR] = record
            else:
                self._fallback[id(error)] = record
                if len(self._fallback) > self.max_fallback_entries:
                    self._fallback.popitem(last=False)
        record.captured = True
        return record

    def clear(self) -> None:
        """Forget records held in the fallback map."""
        self._fallback.clear()

    def fallback_size(self) -> int:
        return len(self._fallback)


class CaptureOrchestrator:
    """
    Decide whether an error is reported and hand accepted ones to the transport.

    The decision path is synchronous: no other capture can interleave between
    the recursion check and the transport hand-off.
    """

    def __init__(
        self,
        transport: Transport,
        deduplication: Optional[DeduplicationCache] = None,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        registry: Optional[CapturedErrorRegistry] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize capture orchestrator.

        Args:
            transport: Transport used for delivery
            deduplication: Fingerprint cache (default: new DeduplicationCache)
            rate_limiter: Acceptance limiter (default: new SlidingWindowRateLimiter)
            registry: Recursive-capture registry (default: new CapturedErrorRegistry)
            clock: Millisecond clock (default: monotonic_ms)
        """
        self.transport = transport
        self.deduplication = deduplication if deduplication is not None else DeduplicationCache()
        self.rate_limiter = rate_limiter if rate_limiter is not None else SlidingWindowRateLimiter()
        self.registry = registry if registry is not None else CapturedErrorRegistry()
        self._clock = clock or monotonic_ms

    def capture(
        self,
        error: Any,
        api_key: str,
        environment: str,
        collector_url: str,
        extra_context: Optional[Mapping] = None,
        severity: Union[Severity, str, None] = None,
    ) -> Awaitable[None]:
        """
        Run an error through the pipeline.

        Never raises, and the returned awaitable never raises.

        Args:
            error: Exception to report (non-exceptions are wrapped)
            api_key: Collector API key
            environment: Normalized environment tag
            collector_url: Collector base URL
            extra_context: Opaque key/value data added to the report context
            severity: error, warning or info

        Returns:
            Delivery task, or a settled awaitable if the error was dropped
        """
        try:
            if not isinstance(error, BaseException):
                error = Exception(str(error))

            if self.registry.is_captured(error):
                logger.debug("Recursive capture prevented")
                return SETTLED
            self.registry.mark(error)

            now = self._clock()
            if self.deduplication.should_suppress(fingerprint(error), now):
                return SETTLED
            if self.rate_limiter.should_limit(now):
                return SETTLED

            payload = ErrorPayload.from_exception(error, environment, extra_context, severity)
            logger.debug(f"Sending: {payload.error.message} ({payload.error.severity})")
            return self.transport.send(payload, api_key, collector_url)

        except Exception as e:
            logger.debug(f"Capture pipeline failed: {e}")
            return SETTLED
