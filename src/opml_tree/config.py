# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads settings from OPML_* environment variables and .env file.

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OPML_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Serialization
    xml_declaration: bool = True

    # CLI file I/O
    encoding: str = "utf-8"

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
