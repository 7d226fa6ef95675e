"""Framework-agnostic HTTP error reporting.

Only server errors (status >= 500) are reported; client errors are the
caller's problem, not the service's.
"""

from typing import Any, Optional

from loguru import logger

from rootly_runtime.core.context import RuntimeContext, get_runtime_context

DEFAULT_STATUS_CODE = 500


def _explicit_status(error: Any) -> Optional[int]:
    for attr in ("status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool) and value:
            return value
    return None


def resolve_status_code(error: Any, response_status: Optional[int] = None) -> int:
    """
    Infer the HTTP status an error maps to.

    Order: explicit ``status``/``status_code`` on the error, then the response
    status if it is already a server error, else 500.

    Args:
        error: Exception raised while handling the request
        response_status: Status already set on the response, if any

    Returns:
        HTTP status code
    """
    status_code = _explicit_status(error)
    if status_code is None and isinstance(response_status, int) and response_status >= 500:
        status_code = response_status
    return status_code if status_code is not None else DEFAULT_STATUS_CODE


async def report_http_error(
    error: Any,
    method: Optional[str] = None,
    path: Optional[str] = None,
    response_status: Optional[int] = None,
    source: str = "http",
    context: Optional[RuntimeContext] = None,
) -> bool:
    """
    Report an error raised while serving a request, if it is a server error.

    Waits for the delivery so it completes before the response goes out.
    Never raises.

    Args:
        error: Exception raised while handling the request
        method: Request method
        path: Request path
        response_status: Status already set on the response, if any
        source: Framework label added to the report context
        context: Runtime context (default: the process context)

    Returns:
        True if the error was handed to the capture pipeline
    """
    try:
        context = context if context is not None else get_runtime_context()
        if not context.api_key:
            return False

        status_code = resolve_status_code(error, response_status)
        if status_code < 500:
            return False

        if not isinstance(error, BaseException):
            error = Exception(str(error))

        extra_context = {
            "source": source,
            "method": method,
            "path": path,
            "status_code": status_code,
        }
        await context.capture(error, extra_context)
        return True
    except Exception as e:
        logger.debug(f"Failed to report HTTP error: {e}")
        return False
