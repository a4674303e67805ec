"""Configuration management for Subscription Message Extractor.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the SUBSCRIPTION_EXTRACTOR_ prefix (e.g., SUBSCRIPTION_EXTRACTOR_LOG_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBSCRIPTION_EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Classification Configuration
    fallback_accept_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description=(
            "Overall extraction confidence above which a message with no registry "
            "match is still accepted as a subscription message"
        ),
    )
    accept_confidence: int = Field(
        default=75,
        ge=0,
        le=100,
        description="Minimum classifier confidence (0-100) for a scanned message to be accepted",
    )
    patterns_path: Path | None = Field(
        default=None,
        description="Optional JSON file with extra pattern rules registered at startup",
    )

    # Batch scanning
    scan_max_workers: int = Field(
        default=4,
        ge=1,
        description="Worker threads used when scanning a batch of messages",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
