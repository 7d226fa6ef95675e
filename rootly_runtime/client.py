"""Host-facing API: init, capture, flush and wrap."""

from typing import Any, Awaitable, Mapping, Optional, Union

from loguru import logger

from rootly_runtime.constants import TransportConfig
from rootly_runtime.core.config import InitOptions, RuntimeSettings
from rootly_runtime.core.context import get_runtime_context
from rootly_runtime.core.environment import Environment
from rootly_runtime.core.exceptions import ConfigurationError
from rootly_runtime.core.hooks import install_hooks
from rootly_runtime.core.logger import set_debug_mode
from rootly_runtime.models.payload import Severity
from rootly_runtime.services.transport import SETTLED
from rootly_runtime.utils.decorators import wrap

__all__ = ["init", "capture", "flush", "wrap", "pending_requests"]


def init(
    api_key: Optional[str] = None,
    environment: Optional[str] = None,
    debug: bool = False,
    capture_unhandled: bool = True,
) -> None:
    """
    Initialize error capture. Only the first successful call has any effect.

    Without a non-empty API key the call is silently ignored.

    Args:
        api_key: Collector API key
        environment: Environment name; 'production'/'prod' map to production,
            anything else to preview. Defaults to ROOTLY_ENVIRONMENT or ENV.
        debug: Emit debug log lines to stderr
        capture_unhandled: Report uncaught exceptions via process hooks
    """
    try:
        options = InitOptions.parse(
            api_key=api_key,
            environment=environment,
            debug=debug,
            capture_unhandled=capture_unhandled,
        )
    except ConfigurationError as e:
        logger.debug(f"init() ignored: {e.message}")
        return

    try:
        context = get_runtime_context()
        if context.initialized:
            return

        settings = RuntimeSettings()
        context.configure(
            api_key=options.api_key,
            environment=Environment.resolve(options.environment, settings.environment),
            api_url=settings.api_url,
        )

        if options.debug:
            set_debug_mode(True)
        if options.capture_unhandled:
            install_hooks(context)
    except Exception as e:
        # Fail silently
        logger.debug(f"init() failed: {e}")


def capture(
    error: Any,
    extra_context: Optional[Mapping] = None,
    severity: Union[Severity, str, None] = None,
) -> Awaitable[None]:
    """
    Report an error manually.

    Safe to fire and forget; awaiting the result waits for the delivery.
    Delivery runs on the running asyncio event loop. Called with no running
    loop (plain synchronous code), the report is dropped and a settled
    awaitable is returned. Never raises.

    Args:
        error: Exception to report
        extra_context: Extra key/value data for the report context
        severity: 'error' (default), 'warning' or 'info'
    """
    try:
        return get_runtime_context().capture(error, extra_context, severity)
    except Exception:
        return SETTLED


async def flush(timeout_ms: float = TransportConfig.FLUSH_TIMEOUT_MS) -> None:
    """
    Wait for pending error reports, at most ``timeout_ms``.

    Call this before a short-lived process or serverless handler exits.

    Example:
        async def handler(event):
            try:
                ...
            except Exception as error:
                capture(error)
                await flush()
                raise
    """
    await get_runtime_context().flush(timeout_ms)


def pending_requests() -> int:
    """Number of deliveries currently in flight."""
    return get_runtime_context().transport.pending_count
