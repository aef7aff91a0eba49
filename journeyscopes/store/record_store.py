"""
Local Record Store

The single owner of persisted app state. Built on a key-value
substrate, with JSON as the format of every stored value.

DESIGN DECISION: No operation raises on storage trouble. Substrate
errors and encoding errors are caught at this boundary, logged, and
reported as a StoreResult outcome. Nothing is retried.

CONCURRENCY: Operations are async and suspend at every substrate call.
The store provides no mutual exclusion. Two overlapping mutations of
the same collection each read, edit and write the whole list, so the
later write silently discards the earlier one (last writer wins at
collection granularity). Callers serialize by awaiting each call,
which is what a human-paced UI does anyway.
"""

import json
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import structlog
from pydantic import ValidationError

from journeyscopes.audit import StoreEventLogger, configure_logging, is_configured
from journeyscopes.config import StoreSettings, get_settings
from journeyscopes.models.events import StoreEvent, StoreEventBuilder
from journeyscopes.models.records import AppSettings, SettingsPatch, Trip, TripPatch
from journeyscopes.models.results import StoreResult
from journeyscopes.services.storage import (
    CorruptDataError,
    KeyValueSubstrate,
    StorageError,
    create_substrate,
)
from journeyscopes.store.collections import (
    BudgetSettingsCollection,
    ChecklistCollection,
    ExpenseCollection,
    RecordCollection,
    SingleObjectCollection,
)
from journeyscopes.store.keys import StorageKeys


logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LocalRecordStore:
    """
    Per-collection CRUD over a key-value substrate.

    Collections:
        trips            - Trip records
        checklist        - ChecklistItem records (with toggle)
        expenses         - Expense records
        settings         - AppSettings object
        budget_settings  - BudgetSettings object

    Contacts and journal entries are kept by callers directly through
    get_data()/store_data() under their keys (see journeyscopes.companions).
    """

    def __init__(
        self,
        substrate: KeyValueSubstrate,
        keys: Optional[StorageKeys] = None,
        event_logger: Optional[StoreEventLogger] = None,
        clock: Optional[Clock] = None,
        json_indent: Optional[int] = None,
    ):
        """
        Initialize the store.

        Args:
            substrate: Where values are persisted
            keys: Key layout (namespace); defaults to "journeyscopes"
            event_logger: Diagnostic sink; a fresh one if None
            clock: Returns the current UTC datetime; used for ids and timestamps
            json_indent: Indent for persisted JSON, None for compact
        """
        self._substrate = substrate
        self._keys = keys or StorageKeys()
        self._events = event_logger or StoreEventLogger()
        self._clock = clock or utc_now
        self._json_indent = json_indent
        self._last_id = 0

        self.trips: RecordCollection[Trip] = RecordCollection(
            self, self._keys.trips, Trip, TripPatch
        )
        self.checklist = ChecklistCollection(self, self._keys.checklist)
        self.expenses = ExpenseCollection(self, self._keys.budget)
        self.settings: SingleObjectCollection[AppSettings] = SingleObjectCollection(
            self, self._keys.settings, AppSettings, SettingsPatch
        )
        self.budget_settings = BudgetSettingsCollection(self, self._keys.budget_settings)

    @property
    def substrate(self) -> KeyValueSubstrate:
        return self._substrate

    @property
    def keys(self) -> StorageKeys:
        return self._keys

    @property
    def events(self) -> StoreEventLogger:
        return self._events

    # -------------------------------------------------------------------------
    # Clock and ids
    # -------------------------------------------------------------------------

    def now(self) -> datetime:
        return self._clock()

    @staticmethod
    def format_timestamp(moment: datetime) -> str:
        """ISO-8601 in UTC with milliseconds, e.g. 2024-05-01T09:30:00.000Z."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        moment = moment.astimezone(timezone.utc)
        return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"

    def next_id(self, moment: Optional[datetime] = None) -> str:
        """
        Millisecond timestamp id, monotonic within this store.

        If the clock has not moved past the last issued id, the next id
        is last + 1. Two store instances on one substrate can still
        collide.
        """
        moment = moment or self.now()
        candidate = int(moment.timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    async def report(
        self,
        build: Callable[..., StoreEvent],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """
        Build a store event and hand it to the event logger.

        A diagnostic that cannot be built is dropped with a warning;
        it never fails the operation being reported.
        """
        try:
            event = build(*args, **kwargs)
        except ValidationError as e:
            logger.warning("store_event_dropped", builder=build.__name__, error=str(e))
            return
        await self._events.log(event)

    async def report_failure(
        self,
        operation: str,
        error: str,
        key: Optional[str] = None,
    ) -> StoreResult:
        await self.report(StoreEventBuilder.storage_failed, operation, error, key=key)
        return StoreResult.io_failure(error)

    async def report_corrupt(self, key: str, error: str) -> StoreResult:
        await self.report(StoreEventBuilder.corrupt_data, key, error)
        return StoreResult.corrupt(error)

    # -------------------------------------------------------------------------
    # Generic primitives
    # -------------------------------------------------------------------------

    async def store_data(self, key: str, value: Any) -> StoreResult[None]:
        """Serialize `value` to JSON and store it under `key`."""
        try:
            payload = json.dumps(
                value,
                indent=self._json_indent,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            return await self.report_failure(
                "store_data", f"Could not serialize value: {e}", key=key
            )

        try:
            await self._substrate.set(key, payload)
        except (StorageError, OSError) as e:
            return await self.report_failure("store_data", str(e), key=key)

        return StoreResult.success()

    async def get_data(self, key: str) -> StoreResult[Any]:
        """
        Read and decode the value under `key`.

        An absent key is NOT_FOUND, not an error.
        """
        try:
            raw = await self._substrate.get(key)
        except CorruptDataError as e:
            return await self.report_corrupt(key, str(e))
        except (StorageError, OSError) as e:
            return await self.report_failure("get_data", str(e), key=key)

        if raw is None:
            return StoreResult.not_found(f"Nothing stored under {key}")

        try:
            return StoreResult.success(json.loads(raw))
        except json.JSONDecodeError as e:
            return await self.report_corrupt(key, f"Malformed JSON: {e}")

    async def remove_data(self, key: str) -> StoreResult[None]:
        try:
            await self._substrate.remove(key)
        except (StorageError, OSError) as e:
            return await self.report_failure("remove_data", str(e), key=key)

        await self.report(StoreEventBuilder.key_removed, key)
        return StoreResult.success()

    async def clear_all(self) -> StoreResult[None]:
        """Remove every key from the substrate (not only this namespace)."""
        try:
            await self._substrate.clear()
        except (StorageError, OSError) as e:
            return await self.report_failure("clear_all", str(e))

        await self.report(StoreEventBuilder.store_cleared)
        return StoreResult.success()


def create_store(
    settings: Optional[StoreSettings] = None,
    substrate: Optional[KeyValueSubstrate] = None,
) -> LocalRecordStore:
    """
    Build a store from configuration.

    Configures logging on first use, picks the substrate named by
    the settings unless one is passed in.
    """
    if settings is None:
        settings = get_settings().store
    if not is_configured():
        log_settings = get_settings().logging
        configure_logging(log_settings.level, log_settings.json_output)

    return LocalRecordStore(
        substrate=substrate or create_substrate(settings),
        keys=StorageKeys(namespace=settings.key_namespace),
        json_indent=settings.json_indent,
    )
