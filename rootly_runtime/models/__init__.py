"""Data models for rootly-runtime."""

from .payload import ErrorDetails, ErrorPayload, Severity, build_context

__all__ = ["ErrorDetails", "ErrorPayload", "Severity", "build_context"]
