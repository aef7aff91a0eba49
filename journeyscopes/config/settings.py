"""
Configuration Management for JourneyScopes

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The store never looks up its substrate or key namespace globally;
both are read from these settings and injected at construction.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Local record store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="JOURNEYSCOPES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["memory", "file"] = Field(
        default="memory",
        description="Key-value substrate to persist collections in"
    )
    data_dir: Path = Field(
        default=Path.home() / ".journeyscopes",
        description="Directory holding one JSON file per key (file backend)"
    )
    key_namespace: str = Field(
        default="journeyscopes",
        min_length=1,
        max_length=64,
        description="Prefix for every storage key"
    )
    json_indent: Optional[int] = Field(
        default=None,
        ge=0,
        le=8,
        description="Indent for persisted JSON (None = compact)"
    )

    @field_validator('key_namespace')
    @classmethod
    def validate_key_namespace(cls, v: str) -> str:
        """Keys become file names with the file backend, keep them simple."""
        cleaned = v.strip()
        if not cleaned.replace("_", "").replace("-", "").isalnum():
            raise ValueError(
                f"Key namespace must be alphanumeric (with _ or -): {v!r}"
            )
        return cleaned


class LoggingSettings(BaseSettings):
    """Diagnostic logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="JOURNEYSCOPES_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render JSON lines (False = human readable console output)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def store(self) -> StoreSettings:
        return StoreSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("store", "logging"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
