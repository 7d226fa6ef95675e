"""Runtime configuration with Pydantic validation."""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rootly_runtime.constants import TransportConfig
from rootly_runtime.core.exceptions import ConfigurationError


class RuntimeSettings(BaseSettings):
    """Settings read from the host process environment."""

    model_config = SettingsConfigDict(env_prefix="ROOTLY_", extra="ignore")

    api_url: str = Field(
        default=TransportConfig.DEFAULT_API_URL, description="Base URL of the collector"
    )
    environment: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ROOTLY_ENVIRONMENT", "ENV"),
        description="Environment name used when init() is not given one",
    )

    @field_validator("api_url", mode="before")
    @classmethod
    def normalize_api_url(cls, value: Any) -> str:
        """Trim the collector URL; blank values fall back to the default."""
        if not isinstance(value, str) or not value.strip():
            return TransportConfig.DEFAULT_API_URL
        return value.strip().rstrip("/")


class InitOptions(BaseModel):
    """Validated arguments of init()."""

    api_key: str = Field(..., min_length=1)
    environment: Optional[str] = None
    debug: bool = False
    capture_unhandled: bool = True

    @field_validator("api_key", mode="before")
    @classmethod
    def strip_api_key(cls, value: Any) -> Any:
        """Reject blank keys by stripping whitespace before the length check."""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("environment", mode="before")
    @classmethod
    def drop_non_string_environment(cls, value: Any) -> Any:
        """Treat non-string environments as unset; they normalize to preview."""
        return value if isinstance(value, str) else None

    @classmethod
    def parse(cls, **kwargs: Any) -> "InitOptions":
        """
        Build options from keyword arguments.

        Raises:
            ConfigurationError: If the options are invalid
        """
        try:
            return cls(**kwargs)
        except ValidationError as e:
            errors = e.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
            raise ConfigurationError(f"Invalid init options: {e.error_count()} error(s)", field)
