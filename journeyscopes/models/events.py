"""
Store Event Models

Every mutation and every failure in the store produces a StoreEvent.
Events go to the diagnostic log; they are not persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


DESCRIPTION_LIMIT = 500


class StoreEventType(str, Enum):
    """Types of events the store reports."""
    # Collection mutations
    RECORD_ADDED = "record_added"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"
    RECORD_TOGGLED = "record_toggled"
    COLLECTION_SAVED = "collection_saved"

    # Single-object collections
    SETTINGS_UPDATED = "settings_updated"

    # Key-level operations
    KEY_REMOVED = "key_removed"
    STORE_CLEARED = "store_cleared"

    # Failures
    STORAGE_FAILED = "storage_failed"
    CORRUPT_DATA = "corrupt_data"


class StoreEventSeverity(str, Enum):
    """Severity level for store events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StoreEvent(BaseModel):
    """A single store event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: StoreEventType
    severity: StoreEventSeverity = StoreEventSeverity.INFO

    # Which storage key and record this is about
    key: Optional[str] = None
    record_id: Optional[str] = None

    description: str = Field(..., max_length=DESCRIPTION_LIMIT)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v: Any) -> Any:
        """Descriptions embed caller keys; cut long ones instead of failing."""
        if isinstance(v, str) and len(v) > DESCRIPTION_LIMIT:
            return v[: DESCRIPTION_LIMIT - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "key": self.key,
            "record_id": self.record_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class StoreEventBuilder:
    """
    Helper class to build store events with common patterns.

    Usage:
        event = StoreEventBuilder.record_added(key="journeyscopes_trips", record_id="1712")
    """

    @staticmethod
    def record_added(key: str, record_id: str, count: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.RECORD_ADDED,
            key=key,
            record_id=record_id,
            description=f"Record added to {key}",
            details={"collection_size": count},
        )

    @staticmethod
    def record_updated(key: str, record_id: str, fields: list[str]) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.RECORD_UPDATED,
            key=key,
            record_id=record_id,
            description=f"Record updated in {key}",
            details={"fields": fields},
        )

    @staticmethod
    def record_deleted(key: str, record_id: str, count: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.RECORD_DELETED,
            key=key,
            record_id=record_id,
            description=f"Record deleted from {key}",
            details={"collection_size": count},
        )

    @staticmethod
    def record_toggled(key: str, record_id: str, completed: bool) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.RECORD_TOGGLED,
            key=key,
            record_id=record_id,
            description=f"Record toggled in {key}",
            details={"completed": completed},
        )

    @staticmethod
    def collection_saved(key: str, count: int) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.COLLECTION_SAVED,
            severity=StoreEventSeverity.DEBUG,
            key=key,
            description=f"Collection {key} replaced",
            details={"collection_size": count},
        )

    @staticmethod
    def settings_updated(key: str, fields: list[str]) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.SETTINGS_UPDATED,
            key=key,
            description=f"Settings under {key} updated",
            details={"fields": fields},
        )

    @staticmethod
    def key_removed(key: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.KEY_REMOVED,
            key=key,
            description=f"Key {key} removed",
        )

    @staticmethod
    def store_cleared() -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORE_CLEARED,
            severity=StoreEventSeverity.WARNING,
            description="All keys cleared",
        )

    @staticmethod
    def storage_failed(
        operation: str,
        error_message: str,
        key: Optional[str] = None,
    ) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.STORAGE_FAILED,
            severity=StoreEventSeverity.ERROR,
            key=key,
            description=f"Storage operation '{operation}' failed",
            details={"operation": operation},
            error_message=error_message,
        )

    @staticmethod
    def corrupt_data(key: str, error_message: str) -> StoreEvent:
        return StoreEvent(
            event_type=StoreEventType.CORRUPT_DATA,
            severity=StoreEventSeverity.ERROR,
            key=key,
            description=f"Persisted data under {key} could not be decoded",
            error_message=error_message,
        )
