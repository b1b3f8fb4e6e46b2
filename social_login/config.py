"""Application configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings loaded from environment variables.

    Per-provider values (``oauth2.<name>.client-id`` and friends) are keyed by
    provider name and are read by the provider registry instead.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Comma-separated provider names to activate at startup
    endpoint_names: str = Field(default="", validation_alias="oauth2.endpoint-names")

    # Applied to every token exchange and profile fetch
    http_timeout: float = Field(default=5.0, validation_alias="oauth2.http-timeout")

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        """Reject timeouts that would disable or break the deadline."""
        if v <= 0:
            raise ValueError("HTTP timeout must be a positive number of seconds")
        return v

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def enabled_endpoint_names(self) -> list[str]:
        """Split the configured provider list, preserving order."""
        return [name.strip() for name in self.endpoint_names.split(",") if name.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
