"""
Abstract Key-Value Substrate Interface

DESIGN DECISION: The store never talks to a concrete persistence
mechanism. It is built on this four-operation contract so we can:
1. Use in-memory storage for testing
2. Persist to a directory of JSON files on a desktop
3. Swap in a platform key-value store later

The interface is intentionally tiny. There is no atomicity across keys,
no transactions and no batching; every call can fail on its own.
Values are opaque strings; the store owns the JSON encoding.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueSubstrate(ABC):
    """
    Abstract interface for the key-value persistence substrate.

    Any substrate (memory, files, a platform store) must implement
    these methods. Each method may raise StorageError.
    """

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store `value` under `key`, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under `key`.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """
        Remove `key`. Removing an absent key is not an error.

        Raises:
            StorageError: If the removal fails
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """
        Remove every key.

        Raises:
            StorageError: If clearing fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SubstrateUnavailableError(StorageError):
    """The substrate is unavailable or denied the operation."""
    pass


class CorruptDataError(StorageError):
    """A persisted value could not be decoded."""
    pass


class StoreOperationError(StorageError):
    """A store operation did not succeed (raised by StoreResult.unwrap)."""

    def __init__(self, message: str, outcome: str):
        super().__init__(message)
        self.outcome = outcome
