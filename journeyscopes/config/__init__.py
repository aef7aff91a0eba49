"""Configuration package."""

from journeyscopes.config.settings import (
    LoggingSettings,
    Settings,
    StoreSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LoggingSettings",
    "Settings",
    "StoreSettings",
    "get_settings",
    "validate_all_settings",
]
