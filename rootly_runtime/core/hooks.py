"""
Process hooks reporting unhandled errors.

Installed once by init(). Each hook reports the error and then hands control
back to whatever handler was in place before.
"""

import asyncio
import sys
from types import TracebackType
from typing import Any, Dict, Optional, Type

from loguru import logger

from rootly_runtime.constants import TransportConfig
from rootly_runtime.core.context import RuntimeContext


async def _report_and_flush(context: RuntimeContext, error: BaseException) -> None:
    context.capture(error)
    await context.flush(TransportConfig.HOOK_FLUSH_TIMEOUT_MS)


def install_excepthook(context: RuntimeContext) -> None:
    """Chain a sys.excepthook that reports uncaught exceptions before exit."""
    previous = sys.excepthook

    def rootly_excepthook(
        exc_type: Type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        # KeyboardInterrupt and SystemExit are not errors worth reporting
        if isinstance(exc, Exception):
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                try:
                    asyncio.run(_report_and_flush(context, exc))
                except Exception as e:
                    logger.debug(f"Failed to report uncaught exception: {e}")
            else:
                context.capture(exc)
        previous(exc_type, exc, tb)

    sys.excepthook = rootly_excepthook


def install_loop_exception_handler(
    context: RuntimeContext, loop: Optional[asyncio.AbstractEventLoop] = None
) -> bool:
    """
    Chain an asyncio exception handler reporting unretrieved task exceptions.

    Args:
        context: Runtime context used for capture
        loop: Event loop (default: the running loop)

    Returns:
        True if installed, False if there is no loop to install on
    """
    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False

    previous = loop.get_exception_handler()

    def rootly_exception_handler(
        event_loop: asyncio.AbstractEventLoop, event: Dict[str, Any]
    ) -> None:
        error = event.get("exception")
        if isinstance(error, Exception):
            context.capture(error, {"source": "asyncio", "detail": event.get("message")})
        if previous is not None:
            previous(event_loop, event)
        else:
            event_loop.default_exception_handler(event)

    loop.set_exception_handler(rootly_exception_handler)
    return True


def install_hooks(context: RuntimeContext) -> None:
    """Install all process hooks once per context."""
    if context.hooks_installed:
        return
    install_excepthook(context)
    if not install_loop_exception_handler(context):
        logger.debug("No running event loop, asyncio exception handler not installed")
    context.hooks_installed = True
