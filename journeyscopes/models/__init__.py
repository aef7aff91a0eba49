"""
Data Models Package

This package contains all Pydantic models used by the JourneyScopes store.
Everything persisted must conform to these schemas.
"""

from journeyscopes.models.records import (
    AppSettings,
    BudgetSettings,
    BudgetSettingsPatch,
    ChecklistItem,
    ChecklistItemPatch,
    ChecklistType,
    Contact,
    ContactPatch,
    Expense,
    ExpensePatch,
    JournalEntry,
    JournalEntryPatch,
    Patch,
    Record,
    SettingsPatch,
    Trip,
    TripPatch,
    WireModel,
    apply_patch,
)
from journeyscopes.models.results import Outcome, StoreResult
from journeyscopes.models.events import (
    StoreEvent,
    StoreEventBuilder,
    StoreEventSeverity,
    StoreEventType,
)

__all__ = [
    # Records
    "AppSettings",
    "BudgetSettings",
    "BudgetSettingsPatch",
    "ChecklistItem",
    "ChecklistItemPatch",
    "ChecklistType",
    "Contact",
    "ContactPatch",
    "Expense",
    "ExpensePatch",
    "JournalEntry",
    "JournalEntryPatch",
    "Patch",
    "Record",
    "SettingsPatch",
    "Trip",
    "TripPatch",
    "WireModel",
    "apply_patch",
    # Results
    "Outcome",
    "StoreResult",
    # Events
    "StoreEvent",
    "StoreEventBuilder",
    "StoreEventSeverity",
    "StoreEventType",
]
