"""
Collections

A collection is an ordered list of records persisted as one JSON array
under one key. Every mutation follows the same cycle:

    read whole list -> edit in memory -> write whole list

There is no per-record address, no index and no partial write.

DESIGN DECISION: A mutation never writes after a failed or corrupt read.
Writing the edited list would otherwise replace whatever is stored with
a list built from nothing.
"""

import math
from typing import TYPE_CHECKING, Any, Generic, Mapping, Optional, Union

from pydantic import ValidationError

from journeyscopes.models.events import StoreEventBuilder
from journeyscopes.models.records import (
    BudgetSettings,
    BudgetSettingsPatch,
    ChecklistItem,
    ChecklistItemPatch,
    Expense,
    ExpensePatch,
    Patch,
    RecordT,
    WireT,
    apply_patch,
)
from journeyscopes.models.results import StoreResult

if TYPE_CHECKING:
    from journeyscopes.store.record_store import LocalRecordStore


Fields = Union[Mapping[str, Any], Patch]


def _carry(result: StoreResult) -> StoreResult:
    """Re-wrap an unsuccessful result so it can be returned as another type."""
    return StoreResult(outcome=result.outcome, error=result.error)


class RecordCollection(Generic[RecordT]):
    """
    CRUD over one collection of records.

    `record_type` is the pydantic model of the stored records,
    `patch_type` the model accepted by add() and update().
    """

    def __init__(
        self,
        store: "LocalRecordStore",
        key: str,
        record_type: type[RecordT],
        patch_type: type[Patch],
    ):
        self._store = store
        self._key = key
        self._record_type = record_type
        self._patch_type = patch_type

    @property
    def key(self) -> str:
        return self._key

    def _coerce(self, fields: Fields) -> Patch:
        """Validate caller input into this collection's patch model."""
        if isinstance(fields, self._patch_type):
            return fields
        if isinstance(fields, Patch):
            return self._patch_type.model_validate(fields.to_wire())
        return self._patch_type.model_validate(dict(fields))

    def _defaults(self, timestamp: str) -> dict[str, Any]:
        """Entity defaults assigned at creation, before caller fields."""
        return {}

    async def load(self) -> StoreResult[list[RecordT]]:
        """
        Read and decode the whole collection.

        A key that was never written, or holds null, is an empty list.
        """
        result = await self._store.get_data(self._key)
        if result.missing:
            return StoreResult.success([])
        if not result.ok:
            return _carry(result)

        raw = result.value
        if raw is None:
            return StoreResult.success([])
        if not isinstance(raw, list):
            return await self._store.report_corrupt(
                self._key, f"expected a JSON array, found {type(raw).__name__}"
            )

        try:
            records = [self._record_type.model_validate(item) for item in raw]
        except ValidationError as e:
            return await self._store.report_corrupt(self._key, str(e))

        return StoreResult.success(records)

    async def _persist(self, records: list[RecordT]) -> StoreResult[None]:
        return await self._store.store_data(
            self._key, [record.to_wire() for record in records]
        )

    async def get_all(self) -> list[RecordT]:
        """
        All records in insertion order.

        Never None: unreadable or corrupt collections read as [].
        """
        result = await self.load()
        return result.value if result.ok else []

    async def get(self, record_id: str) -> Optional[RecordT]:
        for record in await self.get_all():
            if record.id == record_id:
                return record
        return None

    async def save(self, records: list[RecordT]) -> StoreResult[None]:
        """Replace the whole collection."""
        result = await self._persist(records)
        if result.ok:
            await self._store.report(
                StoreEventBuilder.collection_saved, self._key, len(records)
            )
        return result

    async def add(self, fields: Fields) -> StoreResult[RecordT]:
        """
        Append a new record.

        The store assigns id and createdAt; caller fields cannot
        override them.
        """
        patch = self._coerce(fields)

        loaded = await self.load()
        if not loaded.ok:
            return _carry(loaded)
        records = loaded.value

        now = self._store.now()
        timestamp = self._store.format_timestamp(now)
        record = self._record_type.model_validate({
            **self._defaults(timestamp),
            **patch.to_wire(),
            "id": self._store.next_id(now),
            "createdAt": timestamp,
        })
        records.append(record)

        saved = await self._persist(records)
        if not saved.ok:
            return _carry(saved)

        await self._store.report(
            StoreEventBuilder.record_added, self._key, record.id, len(records)
        )
        return StoreResult.success(record)

    async def update(self, record_id: str, fields: Fields) -> StoreResult[RecordT]:
        """
        Merge `fields` over the record with `record_id` and stamp updatedAt.

        Unknown ids give NOT_FOUND and nothing is written.
        """
        patch = self._coerce(fields)

        loaded = await self.load()
        if not loaded.ok:
            return _carry(loaded)
        records = loaded.value

        for index, record in enumerate(records):
            if record.id != record_id:
                continue

            timestamp = self._store.format_timestamp(self._store.now())
            updated = apply_patch(record, patch).model_copy(
                update={"updated_at": timestamp}
            )
            records[index] = updated

            saved = await self._persist(records)
            if not saved.ok:
                return _carry(saved)

            await self._store.report(
                StoreEventBuilder.record_updated,
                self._key,
                record_id,
                sorted(patch.to_wire()),
            )
            return StoreResult.success(updated)

        return StoreResult.not_found(f"No record {record_id} in {self._key}")

    async def delete(self, record_id: str) -> StoreResult[None]:
        """
        Remove the record with `record_id`.

        Writes only when something was actually removed.
        """
        loaded = await self.load()
        if not loaded.ok:
            return _carry(loaded)
        records = loaded.value

        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            return StoreResult.not_found(f"No record {record_id} in {self._key}")

        saved = await self._persist(remaining)
        if not saved.ok:
            return saved

        await self._store.report(
            StoreEventBuilder.record_deleted, self._key, record_id, len(remaining)
        )
        return StoreResult.success()


class ChecklistCollection(RecordCollection[ChecklistItem]):
    """Checklist items, with completion toggling."""

    def __init__(self, store: "LocalRecordStore", key: str):
        super().__init__(store, key, ChecklistItem, ChecklistItemPatch)

    def _defaults(self, timestamp: str) -> dict[str, Any]:
        return {"completed": False}

    async def toggle(self, record_id: str) -> StoreResult[ChecklistItem]:
        """
        Flip `completed` on one item.

        Only `completed` changes; updatedAt is not stamped.
        """
        loaded = await self.load()
        if not loaded.ok:
            return _carry(loaded)
        items = loaded.value

        for index, item in enumerate(items):
            if item.id != record_id:
                continue

            toggled = item.model_copy(update={"completed": not item.completed})
            items[index] = toggled

            saved = await self._persist(items)
            if not saved.ok:
                return _carry(saved)

            await self._store.report(
                StoreEventBuilder.record_toggled, self._key, record_id, toggled.completed
            )
            return StoreResult.success(toggled)

        return StoreResult.not_found(f"No record {record_id} in {self._key}")


class ExpenseCollection(RecordCollection[Expense]):
    """Expenses. `date` defaults to the creation time."""

    def __init__(self, store: "LocalRecordStore", key: str):
        super().__init__(store, key, Expense, ExpensePatch)

    def _defaults(self, timestamp: str) -> dict[str, Any]:
        return {"date": timestamp}


class SingleObjectCollection(Generic[WireT]):
    """
    A collection holding one object instead of a list.

    Reads overlay whatever is persisted (possibly partial) on the
    model's defaults. Updates merge shallowly and persist the result.
    """

    def __init__(
        self,
        store: "LocalRecordStore",
        key: str,
        model_type: type[WireT],
        patch_type: type[Patch],
    ):
        self._store = store
        self._key = key
        self._model_type = model_type
        self._patch_type = patch_type

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> StoreResult[WireT]:
        result = await self._store.get_data(self._key)
        if result.missing or (result.ok and result.value is None):
            return StoreResult.success(self._model_type())
        if not result.ok:
            return _carry(result)

        if not isinstance(result.value, dict):
            return await self._store.report_corrupt(
                self._key,
                f"expected a JSON object, found {type(result.value).__name__}",
            )

        try:
            return StoreResult.success(self._model_type.model_validate(result.value))
        except ValidationError as e:
            return await self._store.report_corrupt(self._key, str(e))

    async def get(self) -> WireT:
        """Persisted values over defaults; defaults alone if unreadable."""
        result = await self.load()
        return result.value if result.ok else self._model_type()

    async def save(self, value: WireT) -> StoreResult[WireT]:
        saved = await self._store.store_data(self._key, value.to_wire())
        if not saved.ok:
            return _carry(saved)
        return StoreResult.success(value)

    async def update(self, fields: Fields) -> StoreResult[WireT]:
        """Shallow-merge `fields` over the current (defaulted) object."""
        if isinstance(fields, self._patch_type):
            patch = fields
        elif isinstance(fields, Patch):
            patch = self._patch_type.model_validate(fields.to_wire())
        else:
            patch = self._patch_type.model_validate(dict(fields))

        loaded = await self.load()
        if not loaded.ok:
            return _carry(loaded)

        merged = apply_patch(loaded.value, patch)
        saved = await self.save(merged)
        if saved.ok:
            await self._store.report(
                StoreEventBuilder.settings_updated, self._key, sorted(patch.to_wire())
            )
        return saved


class BudgetSettingsCollection(SingleObjectCollection[BudgetSettings]):
    """Budget settings, holding the spending cap."""

    def __init__(self, store: "LocalRecordStore", key: str):
        super().__init__(store, key, BudgetSettings, BudgetSettingsPatch)

    async def get_cap(self) -> Optional[float]:
        return (await self.get()).budget_cap

    async def set_cap(self, amount: Union[float, int, str]) -> StoreResult[BudgetSettings]:
        """
        Set the budget cap.

        Raises:
            ValueError: If `amount` is not a finite, non-negative number
        """
        cap = float(amount)
        if not math.isfinite(cap) or cap < 0:
            raise ValueError(f"Budget cap must be a non-negative number: {amount!r}")
        return await self.update(BudgetSettingsPatch(budget_cap=cap))
