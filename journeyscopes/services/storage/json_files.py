"""
JSON File Substrate

DESIGN DECISION: Each key is stored as its own file, `<key>.json`,
inside one data directory. This mirrors how the app persisted one blob
per key, and keeps the data readable with any text editor.

TRADEOFFS:
- Not suitable for many thousands of keys (we have seven)
- No locking between processes (the app is single-process)
- Each write goes to a temp file first and is moved into place with
  os.replace, so one `set` is never half-written

Blocking file I/O runs in a worker thread so the event loop stays free.
"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from journeyscopes.services.storage.interface import (
    CorruptDataError,
    KeyValueSubstrate,
    SubstrateUnavailableError,
)


logger = structlog.get_logger(__name__)

SUFFIX = ".json"


class JsonFileSubstrate(KeyValueSubstrate):
    """
    Key-value substrate backed by a directory of JSON files.

    The directory is created on first write.
    """

    def __init__(self, directory: Path | str):
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise SubstrateUnavailableError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{SUFFIX}"

    # Blocking helpers (run in a worker thread)

    def _write(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"{path.name} is not valid UTF-8: {e}") from e

    def _remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _clear(self) -> None:
        if not self._directory.exists():
            return
        for path in self._directory.glob(f"*{SUFFIX}"):
            path.unlink(missing_ok=True)

    # Async interface

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._write, key, value)
        except OSError as e:
            raise SubstrateUnavailableError(f"Failed to write {key}: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._read, key)
        except OSError as e:
            raise SubstrateUnavailableError(f"Failed to read {key}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._remove, key)
        except OSError as e:
            raise SubstrateUnavailableError(f"Failed to remove {key}: {e}") from e

    async def clear(self) -> None:
        try:
            await asyncio.to_thread(self._clear)
        except OSError as e:
            raise SubstrateUnavailableError(
                f"Failed to clear {self._directory}: {e}"
            ) from e
        logger.debug("substrate_cleared", directory=str(self._directory))
