"""
Application settings using Pydantic.

Provides environment-based configuration loading with RULESYNC_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RULESYNC_",
        extra="ignore",
    )

    # Mimir / Cortex ruler
    mimir_address: str | None = None
    mimir_tenant_id: str | None = None
    mimir_api_key: str | None = None
    mimir_username: str | None = None
    mimir_password: str | None = None
    mimir_rules_path: str = "/prometheus/config/v1/rules"

    # HTTP client settings
    http_timeout: float = 30.0

    # Logging
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
