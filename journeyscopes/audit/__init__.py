"""Diagnostic logging package."""

from journeyscopes.audit.logger import (
    StoreEventLogger,
    configure_logging,
    is_configured,
)

__all__ = ["StoreEventLogger", "configure_logging", "is_configured"]
