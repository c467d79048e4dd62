"""Configuration management for the document classifier service.

This module uses Pydantic Settings to load configuration from environment
variables. All settings are validated at startup to catch configuration
errors early. The classifier itself needs no configuration; these settings
only shape the HTTP service around it.
"""

import logging
import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_RATE_LIMIT_RE = re.compile(r"^\d+\s*/\s*(second|minute|hour|day)$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Upload limits
    max_upload_size_mb: int = Field(
        default=25,
        ge=1,
        le=200,
        description="Maximum accepted upload size in megabytes"
    )

    # Rate limits (slowapi syntax, e.g. "10/minute")
    classify_rate_limit: str = Field(
        default="60/minute",
        description="Rate limit for POST /api/classify"
    )
    upload_rate_limit: str = Field(
        default="10/minute",
        description="Rate limit for POST /api/classify/upload"
    )
    batch_rate_limit: str = Field(
        default="5/minute",
        description="Rate limit for POST /api/classify/batch"
    )

    trusted_proxies: str = Field(
        default="",
        description="Comma-separated proxy IPs whose X-Forwarded-For is trusted"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # Model configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("classify_rate_limit", "upload_rate_limit", "batch_rate_limit")
    @classmethod
    def validate_rate_limit(cls, v: str) -> str:
        """Validate that a rate limit looks like '<count>/<period>'."""
        value = v.strip().lower()
        if not _RATE_LIMIT_RE.match(value):
            raise ValueError(
                f"Invalid rate limit '{v}'. Expected '<count>/<second|minute|hour|day>'"
            )
        return re.sub(r"\s+", "", value)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that LOG_LEVEL names a standard logging level."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a standard logging level (got: {v})")
        return level

    @property
    def trusted_proxy_list(self) -> list[str]:
        return [ip.strip() for ip in self.trusted_proxies.split(",") if ip.strip()]

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance.

    Returns:
        Settings: Validated application settings

    Raises:
        ValueError: If environment variables are invalid
    """
    return Settings()
