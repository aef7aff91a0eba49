"""
In-Memory Substrate

A dict-backed substrate for tests and for running without a disk.

Each call yields to the event loop once before touching the dict,
the way a real asynchronous store suspends on I/O. This keeps
interleavings between concurrent store calls observable.
"""

import asyncio
from typing import Optional

from journeyscopes.services.storage.interface import KeyValueSubstrate


class InMemorySubstrate(KeyValueSubstrate):
    """Key-value substrate held in a plain dict."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        self._data[key] = value

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        return self._data.get(key)

    async def remove(self, key: str) -> None:
        await asyncio.sleep(0)
        self._data.pop(key, None)

    async def clear(self) -> None:
        await asyncio.sleep(0)
        self._data.clear()

    def snapshot(self) -> dict[str, str]:
        """Copy of the raw stored values, for inspection."""
        return dict(self._data)
