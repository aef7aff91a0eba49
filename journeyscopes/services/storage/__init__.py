"""
Storage Services Package

Provides the abstract key-value substrate interface and concrete substrates.
The store is written against the interface, so substrates are swappable.
"""

from journeyscopes.services.storage.interface import (
    CorruptDataError,
    KeyValueSubstrate,
    StorageError,
    StoreOperationError,
    SubstrateUnavailableError,
)
from journeyscopes.services.storage.memory import InMemorySubstrate
from journeyscopes.services.storage.json_files import JsonFileSubstrate
from journeyscopes.services.storage.factory import create_substrate

__all__ = [
    # Interface
    "KeyValueSubstrate",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    "StoreOperationError",
    "SubstrateUnavailableError",
    # Implementations
    "InMemorySubstrate",
    "JsonFileSubstrate",
    "create_substrate",
]
