"""
Shared fixtures for JourneyScopes tests.

No test touches the real home directory: substrates are in memory or
live under pytest's tmp_path.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from journeyscopes.services.storage import (
    InMemorySubstrate,
    SubstrateUnavailableError,
)
from journeyscopes.store import LocalRecordStore


START = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


class SteppingClock:
    """Clock that advances by `step` every time it is read."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(0)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        moment = self.current
        self.current = self.current + self.step
        return moment

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


class FlakySubstrate(InMemorySubstrate):
    """In-memory substrate whose operations can be made to fail."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        super().__init__(initial)
        self.fail_get = False
        self.fail_set = False
        self.fail_remove = False
        self.fail_clear = False
        self.set_calls = 0

    async def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        if self.fail_set:
            raise SubstrateUnavailableError("disk full")
        await super().set(key, value)

    async def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise SubstrateUnavailableError("storage locked")
        return await super().get(key)

    async def remove(self, key: str) -> None:
        if self.fail_remove:
            raise SubstrateUnavailableError("storage locked")
        await super().remove(key)

    async def clear(self) -> None:
        if self.fail_clear:
            raise SubstrateUnavailableError("storage locked")
        await super().clear()


@pytest.fixture()
def clock() -> SteppingClock:
    """A clock frozen at 2024-05-01 09:00 UTC."""
    return SteppingClock()


@pytest.fixture()
def substrate() -> FlakySubstrate:
    return FlakySubstrate()


@pytest.fixture()
def store(substrate, clock) -> LocalRecordStore:
    return LocalRecordStore(substrate, clock=clock)
