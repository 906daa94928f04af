# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to logging config, source timeouts, and filter vocabularies

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Interface controls that show up as labeled elements but are not course content
DEFAULT_EXCLUDE_LABELS = [
    "close modal",
    "previous",
    "next",
    "back",
    "submit",
    "continue",
    "skip",
    "menu",
    "not viewed",
    "marker,",
    "information, not viewed",
]

# Transient player messages that look like quiz questions
DEFAULT_SYSTEM_MESSAGES = [
    "you are offline",
    "trying to reconnect",
    "loading",
    "please wait",
    "error occurred",
    "begin by",
    "select either option",
]


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="COURSE_SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    # Source Configuration
    source_timeout: float = Field(
        default=10.0, gt=0.0, description="Seconds to wait for a single extraction source before giving up on it"
    )
    http_retry_attempts: int = Field(default=3, ge=1, description="Attempts per HTTP source on transient failures")

    # Filter Vocabularies
    exclude_labels: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_LABELS),
        description="Case-insensitive UI-chrome labels dropped before segmentation",
    )
    system_messages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYSTEM_MESSAGES),
        description="Case-insensitive substrings marking a captured question as a player system message",
    )


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
