"""Error capture middleware for FastAPI/Starlette applications."""

from typing import Callable, Optional, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from rootly_runtime.core.context import RuntimeContext
from rootly_runtime.middleware.error_handler import report_http_error


class ErrorCaptureMiddleware(BaseHTTPMiddleware):
    """
    Report unhandled request exceptions, then let them propagate.

    The framework's own error handling still produces the response.
    """

    def __init__(self, app: ASGIApp, context: Optional[RuntimeContext] = None):
        super().__init__(app)
        self._context = context

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and report any exception escaping the application.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler in chain

        Returns:
            Response object
        """
        try:
            response = await call_next(request)
            return cast(Response, response)
        except Exception as e:
            await report_http_error(
                e,
                method=request.method,
                path=request.url.path,
                source="fastapi",
                context=self._context,
            )
            raise
