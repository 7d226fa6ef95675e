"""Decorators reporting exceptions raised by wrapped callables."""

import functools
import inspect
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger

F = TypeVar("F", bound=Callable[..., Any])


def _report(error: Exception) -> None:
    # Import here to avoid circular dependency
    from rootly_runtime.core.context import get_runtime_context

    try:
        get_runtime_context().capture(error)
    except Exception as e:
        logger.debug(f"Failed to report wrapped exception: {e}")


async def _watch(awaitable: Awaitable[Any]) -> Any:
    try:
        return await awaitable
    except Exception as e:
        _report(e)
        raise


def wrap(func: F) -> F:
    """
    Report exceptions raised by ``func`` and re-raise them unchanged.

    Works for plain functions, coroutine functions, and plain functions that
    return an awaitable. The report is fire-and-forget. Exceptions that are
    not ``Exception`` subclasses (cancellation, interrupts) pass through
    unreported. Reports need a running event loop, so failures of a plain
    function called outside one are re-raised without being reported.

    Example:
        @wrap
        async def handle(event):
            ...
    """

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _report(e)
                raise

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _report(e)
            raise
        if inspect.isawaitable(result):
            return _watch(result)
        return result

    return sync_wrapper  # type: ignore[return-value]
