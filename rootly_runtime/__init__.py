"""rootly-runtime - Runtime error tracking for Python services."""

import importlib as _importlib
from typing import TYPE_CHECKING, Any

from loguru import logger as _logger

from .client import capture, flush, init, pending_requests, wrap
from .core.logger import is_debug_mode, set_debug_mode
from .models.payload import Severity

__version__ = "1.0.0"
__license__ = "MIT"

# Library records stay silent unless debug mode is enabled
_logger.disable(__name__)

if TYPE_CHECKING:
    from .core.context import RuntimeContext as RuntimeContext
    from .core.context import get_runtime_context as get_runtime_context
    from .middleware.asgi import ErrorCaptureMiddleware as ErrorCaptureMiddleware
    from .middleware.error_handler import report_http_error as report_http_error
    from .middleware.error_handler import resolve_status_code as resolve_status_code

# Explicit lazy-loading map: name -> (module_path, attribute_name)
_LAZY_MODULE_MAP = {
    "RuntimeContext": ("rootly_runtime.core.context", "RuntimeContext"),
    "get_runtime_context": ("rootly_runtime.core.context", "get_runtime_context"),
    # FastAPI is only imported when the middleware is used
    "ErrorCaptureMiddleware": ("rootly_runtime.middleware.asgi", "ErrorCaptureMiddleware"),
    "report_http_error": ("rootly_runtime.middleware.error_handler", "report_http_error"),
    "resolve_status_code": ("rootly_runtime.middleware.error_handler", "resolve_status_code"),
}

__all__ = [
    "init",
    "capture",
    "flush",
    "wrap",
    "pending_requests",
    "set_debug_mode",
    "is_debug_mode",
    "Severity",
    *_LAZY_MODULE_MAP.keys(),
]


def __getattr__(name: str) -> Any:
    """Lazy import with explicit mapping - importlib based."""
    if name in _LAZY_MODULE_MAP:
        module_path, attr_name = _LAZY_MODULE_MAP[name]
        module = _importlib.import_module(module_path)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
