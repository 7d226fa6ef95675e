"""Utility helpers for rootly-runtime."""

from .fingerprint import fingerprint, stable_stack_frame

__all__ = ["fingerprint", "stable_stack_frame"]
