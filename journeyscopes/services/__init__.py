"""Services package."""

from journeyscopes.services.storage import (
    CorruptDataError,
    InMemorySubstrate,
    JsonFileSubstrate,
    KeyValueSubstrate,
    StorageError,
    StoreOperationError,
    SubstrateUnavailableError,
    create_substrate,
)

__all__ = [
    "CorruptDataError",
    "InMemorySubstrate",
    "JsonFileSubstrate",
    "KeyValueSubstrate",
    "StorageError",
    "StoreOperationError",
    "SubstrateUnavailableError",
    "create_substrate",
]
