"""HTTP framework integration."""

from .error_handler import report_http_error, resolve_status_code

__all__ = ["report_http_error", "resolve_status_code"]
