"""
Operation Results

DESIGN DECISION: Store operations never raise on storage trouble.
Instead of a bare True/False (or None) every operation returns a
StoreResult whose outcome tells callers exactly what happened:

- SUCCESS: the operation completed
- NOT_FOUND: nothing to act on (unknown id, absent key); not an error
- IO_FAILURE: the substrate or the JSON encoder failed
- CORRUPT_DATA: the persisted blob could not be decoded

Callers branch on the outcome instead of on truthiness.
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from journeyscopes.services.storage.interface import StoreOperationError


T = TypeVar("T")


class Outcome(str, Enum):
    """What a store operation ended with."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    CORRUPT_DATA = "corrupt_data"


class StoreResult(BaseModel, Generic[T]):
    """Outcome of a store operation, plus its value when there is one."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    outcome: Outcome
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(outcome=Outcome.SUCCESS, value=value)

    @classmethod
    def not_found(cls, error: Optional[str] = None) -> "StoreResult[T]":
        return cls(outcome=Outcome.NOT_FOUND, error=error)

    @classmethod
    def io_failure(cls, error: str) -> "StoreResult[T]":
        return cls(outcome=Outcome.IO_FAILURE, error=error)

    @classmethod
    def corrupt(cls, error: str) -> "StoreResult[T]":
        return cls(outcome=Outcome.CORRUPT_DATA, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def missing(self) -> bool:
        return self.outcome is Outcome.NOT_FOUND

    @property
    def failed(self) -> bool:
        """True for I/O and corrupt-data failures (not for NOT_FOUND)."""
        return self.outcome in (Outcome.IO_FAILURE, Outcome.CORRUPT_DATA)

    def unwrap(self) -> T:
        """
        Return the value or raise StoreOperationError.

        For callers that would rather handle an exception than
        branch on the outcome.
        """
        if not self.ok:
            raise StoreOperationError(
                f"Store operation ended with {self.outcome.value}: {self.error}",
                outcome=self.outcome.value,
            )
        return self.value
