"""
Contact and Journal Books

These are kept the way the app's screens always kept them: directly on
top of the store's generic get_data()/store_data() primitives, not as
named store collections. Each book reads the whole list under its key,
edits it, and writes the whole list back.
"""

from typing import Any, Generic, Mapping, Optional

from pydantic import ValidationError

from journeyscopes.models.records import (
    Contact,
    ContactPatch,
    JournalEntry,
    JournalEntryPatch,
    Patch,
    RecordT,
    apply_patch,
)
from journeyscopes.models.results import StoreResult
from journeyscopes.store.record_store import LocalRecordStore


class _Book(Generic[RecordT]):
    """Shared read/write cycle for the ad hoc lists."""

    record_type: type[RecordT]
    patch_type: type[Patch]

    def __init__(self, store: LocalRecordStore, key: str):
        self._store = store
        self._key = key

    async def _load(self) -> StoreResult[list[RecordT]]:
        result = await self._store.get_data(self._key)
        if result.missing or (result.ok and result.value is None):
            return StoreResult.success([])
        if not result.ok:
            return StoreResult(outcome=result.outcome, error=result.error)
        if not isinstance(result.value, list):
            return await self._store.report_corrupt(self._key, "expected a JSON array")
        try:
            return StoreResult.success(
                [self.record_type.model_validate(item) for item in result.value]
            )
        except ValidationError as e:
            return await self._store.report_corrupt(self._key, str(e))

    async def _write(self, records: list[RecordT]) -> StoreResult[None]:
        return await self._store.store_data(
            self._key, [record.to_wire() for record in records]
        )

    async def get_all(self) -> list[RecordT]:
        result = await self._load()
        return result.value if result.ok else []

    def _validate(self, record: RecordT) -> None:
        """Raise ValueError if `record` may not be saved."""

    async def save(
        self,
        fields: Mapping[str, Any],
        record_id: Optional[str] = None,
    ) -> StoreResult[RecordT]:
        """
        Add a new record, or update the one with `record_id`.

        Raises:
            ValueError: If the resulting record fails validation
        """
        patch = self.patch_type.model_validate(dict(fields))

        loaded = await self._load()
        if not loaded.ok:
            return StoreResult(outcome=loaded.outcome, error=loaded.error)
        records = loaded.value

        now = self._store.now()
        timestamp = self._store.format_timestamp(now)

        if record_id is None:
            record = self.record_type.model_validate({
                **patch.to_wire(),
                "id": self._store.next_id(now),
                "createdAt": timestamp,
            })
            self._validate(record)
            records = [*records, record]
        else:
            for index, existing in enumerate(records):
                if existing.id == record_id:
                    record = apply_patch(existing, patch).model_copy(
                        update={"updated_at": timestamp}
                    )
                    self._validate(record)
                    records[index] = record
                    break
            else:
                return StoreResult.not_found(f"No record {record_id} in {self._key}")

        written = await self._write(records)
        if not written.ok:
            return StoreResult(outcome=written.outcome, error=written.error)
        return StoreResult.success(record)

    async def delete(self, record_id: str) -> StoreResult[None]:
        loaded = await self._load()
        if not loaded.ok:
            return StoreResult(outcome=loaded.outcome, error=loaded.error)

        remaining = [record for record in loaded.value if record.id != record_id]
        if len(remaining) == len(loaded.value):
            return StoreResult.not_found(f"No record {record_id} in {self._key}")
        return await self._write(remaining)


class ContactBook(_Book[Contact]):
    """Custom emergency contacts."""

    record_type = Contact
    patch_type = ContactPatch

    def __init__(self, store: LocalRecordStore):
        super().__init__(store, store.keys.emergency_contacts)

    def _validate(self, record: Contact) -> None:
        if not record.name.strip() or not record.number.strip():
            raise ValueError("Please enter both name and phone number")

    async def save_contact(
        self,
        fields: Mapping[str, Any],
        contact_id: Optional[str] = None,
    ) -> StoreResult[Contact]:
        return await self.save(fields, record_id=contact_id)

    async def search(self, query: str) -> list[Contact]:
        """Contacts whose name, number or relationship contains `query`."""
        contacts = await self.get_all()
        if not query:
            return contacts

        needle = query.lower()
        return [
            contact for contact in contacts
            if needle in contact.name.lower()
            or query in contact.number
            or needle in (contact.relationship or "").lower()
        ]


class JournalBook(_Book[JournalEntry]):
    """Travel journal entries, each tied to a trip."""

    record_type = JournalEntry
    patch_type = JournalEntryPatch

    def __init__(self, store: LocalRecordStore):
        super().__init__(store, store.keys.journal)

    def _validate(self, record: JournalEntry) -> None:
        if not record.title.strip():
            raise ValueError("Please enter a title for your journal entry")
        if not record.trip_id:
            raise ValueError("Please select a trip for this journal entry")

    async def entries(self, trip_id: Optional[str] = None) -> list[JournalEntry]:
        """All entries, or only those of one trip."""
        entries = await self.get_all()
        if trip_id is None:
            return entries
        return [entry for entry in entries if entry.trip_id == trip_id]

    async def save_entry(
        self,
        fields: Mapping[str, Any],
        entry_id: Optional[str] = None,
    ) -> StoreResult[JournalEntry]:
        return await self.save(fields, record_id=entry_id)
