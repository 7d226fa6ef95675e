"""Pydantic models for the collector wire payload."""

import json
import traceback
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict

from rootly_runtime.constants import PayloadDefaults


class Severity(str, Enum):
    """Report severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def coerce(cls, value: Union["Severity", str, None]) -> "Severity":
        """Convert user input to a severity, falling back to ERROR."""
        if value is None:
            return cls.ERROR
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.debug(f"Unknown severity {value!r}, using 'error'")
            return cls.ERROR


class ErrorDetails(BaseModel):
    """Error section of the payload."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    message: str
    type: str
    stack: str
    severity: Severity = Severity.ERROR


class ErrorPayload(BaseModel):
    """Point-in-time error report sent to the collector."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetails
    context: Dict[Any, Any]

    @classmethod
    def from_exception(
        cls,
        error: BaseException,
        environment: str,
        extra_context: Optional[Mapping] = None,
        severity: Union[Severity, str, None] = None,
    ) -> "ErrorPayload":
        """
        Build a payload snapshot from an exception.

        Args:
            error: Exception being reported
            environment: Normalized environment tag
            extra_context: Opaque key/value data passed through unmodified
            severity: error, warning or info (default: error)

        Returns:
            ErrorPayload instance
        """
        if error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        else:
            stack = PayloadDefaults.STACK

        details = ErrorDetails(
            message=str(error) or PayloadDefaults.MESSAGE,
            type=type(error).__name__ or PayloadDefaults.ERROR_TYPE,
            stack=stack,
            severity=Severity.coerce(severity),
        )
        return cls(error=details, context=build_context(environment, extra_context))

    def to_dict(self) -> Dict[str, Any]:
        """Convert payload to a plain dictionary."""
        return self.model_dump()

    def to_json(self) -> str:
        """Serialize payload; values JSON cannot encode are stringified."""
        return json.dumps(self.model_dump(), default=str)


def build_context(environment: str, extra_context: Optional[Mapping] = None) -> Dict[str, Any]:
    """Merge the environment tag with caller-supplied context."""
    context: Dict[str, Any] = {"environment": environment}
    if extra_context is None:
        return context
    if not isinstance(extra_context, Mapping):
        logger.debug(f"Ignoring non-mapping extra context of type {type(extra_context).__name__}")
        return context
    context.update(extra_context)
    return context
