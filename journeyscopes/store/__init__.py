"""
Local Record Store Package

The store and its collections. Screens and other callers use
LocalRecordStore (or create_store) and nothing below it.
"""

from journeyscopes.store.keys import StorageKeys
from journeyscopes.store.collections import (
    BudgetSettingsCollection,
    ChecklistCollection,
    ExpenseCollection,
    RecordCollection,
    SingleObjectCollection,
)
from journeyscopes.store.record_store import LocalRecordStore, create_store, utc_now

__all__ = [
    "BudgetSettingsCollection",
    "ChecklistCollection",
    "ExpenseCollection",
    "LocalRecordStore",
    "RecordCollection",
    "SingleObjectCollection",
    "StorageKeys",
    "create_store",
    "utc_now",
]
