"""Process-wide capture state.

All mutable state (deduplication cache, rate window, in-flight deliveries and
the initialized flag) lives on one RuntimeContext. The module keeps a single
process instance; tests build isolated ones.
"""

from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from loguru import logger

from rootly_runtime.constants import TransportConfig
from rootly_runtime.core.environment import Environment
from rootly_runtime.models.payload import Severity
from rootly_runtime.services.capture import CaptureOrchestrator
from rootly_runtime.services.transport import SETTLED, Transport


class RuntimeContext:
    """Capture pipeline state with one-shot configuration."""

    def __init__(
        self,
        transport: Optional[Transport] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize runtime context.

        Args:
            transport: Transport for deliveries (default: new Transport)
            clock: Millisecond clock for dedup and rate limiting
        """
        self.transport = transport if transport is not None else Transport()
        self.orchestrator = CaptureOrchestrator(self.transport, clock=clock)
        self.initialized = False
        self.hooks_installed = False
        self.api_key: Optional[str] = None
        self.environment: str = Environment.PREVIEW
        self.api_url: str = TransportConfig.DEFAULT_API_URL

    def configure(self, api_key: str, environment: str, api_url: str) -> bool:
        """
        Apply configuration once.

        Returns:
            True if applied, False if the context was already initialized
        """
        if self.initialized:
            return False

        self.api_key = api_key
        self.environment = environment
        self.api_url = api_url
        self.initialized = True
        logger.debug(f"Initialized (environment={environment}, api_url={api_url})")
        return True

    def capture(
        self,
        error: Any,
        extra_context: Optional[Mapping] = None,
        severity: Union[Severity, str, None] = None,
    ) -> Awaitable[None]:
        """Capture an error with the configured credentials; no-op before init."""
        if not self.api_key:
            return SETTLED
        return self.orchestrator.capture(
            error, self.api_key, self.environment, self.api_url, extra_context, severity
        )

    async def flush(self, timeout_ms: float = TransportConfig.FLUSH_TIMEOUT_MS) -> None:
        """Wait for in-flight deliveries, at most ``timeout_ms``."""
        await self.transport.flush(timeout_ms)


# Global runtime context
_runtime_context: RuntimeContext = RuntimeContext()


def get_runtime_context() -> RuntimeContext:
    """Get the process-wide runtime context."""
    return _runtime_context


def set_runtime_context(context: RuntimeContext) -> RuntimeContext:
    """
    Replace the process-wide runtime context.

    Returns:
        The previous context
    """
    global _runtime_context
    previous = _runtime_context
    _runtime_context = context
    return previous


def reset_runtime_context() -> RuntimeContext:
    """Install a fresh, uninitialized runtime context and return it."""
    context = RuntimeContext()
    set_runtime_context(context)
    return context
