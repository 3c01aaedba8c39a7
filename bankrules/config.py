"""Configuration loading for the bankrules host.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from decimal import Decimal
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support. Variables are prefixed with BANKRULES_.
    """

    model_config = SettingsConfigDict(
        env_prefix="BANKRULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Policy configuration
    personal_daily_transfer_limit: Decimal = Field(
        default=Decimal("10000"),
        description="Daily outgoing transfer cap for personal checking accounts",
    )

    # Authorizer configuration
    authorizer_backend: Literal["static_allow", "static_deny", "http"] = Field(
        default="static_allow",
        description="Transfer authorizer backend type",
    )
    authorizer_url: str = Field(
        default="http://localhost:8081",
        description="Base URL of the HTTP authorization service",
    )
    authorizer_api_key: str = Field(
        default="",
        description="Bearer token for the HTTP authorization service",
    )
    authorizer_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for HTTP authorization requests in seconds",
    )

    # Reporting
    report_format: Literal["text", "json"] = Field(
        default="text",
        description="Mutation report output format",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("personal_daily_transfer_limit")
    @classmethod
    def validate_daily_limit(cls, v: Decimal) -> Decimal:
        """Ensure the daily transfer limit is positive."""
        if v <= 0:
            raise ValueError("personal_daily_transfer_limit must be positive")
        return v

    @field_validator("authorizer_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure the authorizer timeout is positive."""
        if v <= 0:
            raise ValueError("authorizer_timeout_seconds must be positive")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
