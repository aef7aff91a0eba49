"""
Record Models for JourneyScopes

These models define the schemas of everything the store persists.
They are designed to:
1. Keep the persisted JSON wire format (camelCase keys) stable
2. Keep Python attribute names idiomatic (snake_case)
3. Make store-owned fields (id, createdAt, updatedAt) impossible to patch
4. Preserve unknown fields found in older or richer blobs

DESIGN DECISION: Records accept extra keys. The store does not own the
full shape of what screens put into a record, and a read-modify-write
must never strip fields it does not know about.
"""

from enum import Enum
from typing import Any, ClassVar, Optional, TypeVar, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel


STORE_OWNED_FIELDS = frozenset({
    "id",
    "createdAt",
    "created_at",
    "updatedAt",
    "updated_at",
})


# =============================================================================
# ENUMS
# =============================================================================

class ChecklistType(str, Enum):
    """Which list a checklist item belongs to."""
    PACKING = "packing"
    TASKS = "tasks"


# =============================================================================
# BASE MODELS
# =============================================================================

class WireModel(BaseModel):
    """
    Base for everything persisted as JSON.

    Field names are snake_case in Python and camelCase on the wire.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Convert to the JSON-ready dict that gets persisted."""
        return self.model_dump(mode="json", by_alias=True)


class Record(WireModel):
    """
    One entry of a collection.

    id and created_at are assigned by the store when the record is added.
    updated_at stays absent until the first update.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Store-assigned identifier, unique within its collection"
    )
    created_at: str = Field(
        ...,
        description="ISO-8601 creation timestamp"
    )
    updated_at: Optional[str] = Field(
        default=None,
        description="ISO-8601 timestamp of the last update"
    )

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        for key in ("createdAt", "updatedAt"):
            if key in data and data[key] is None:
                del data[key]
        return data


class Patch(WireModel):
    """
    Partial update for a record.

    Only the fields a caller explicitly sets are merged.
    Store-owned fields are rejected outright.
    """

    # Declared fields that may be explicitly cleared with None
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def reject_store_owned_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            owned = set(data) & STORE_OWNED_FIELDS
            if owned:
                raise ValueError(
                    f"Store-owned fields cannot be patched: {sorted(owned)}"
                )
        return data

    @model_validator(mode="after")
    def reject_null_fields(self) -> "Patch":
        nulls = sorted(
            name for name in self.model_fields_set
            if name in type(self).model_fields
            and name not in self.nullable_fields
            and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields cannot be set to null: {nulls}")
        return self

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        for key, value in (self.model_extra or {}).items():
            data.setdefault(key, value)
        return data


# =============================================================================
# COLLECTION RECORDS
# =============================================================================

class Trip(Record):
    """A planned or past trip. Dates are free-form strings."""

    destination: str = ""
    start_date: str = ""
    end_date: str = ""


class ChecklistItem(Record):
    """A packing or task item tied to a trip."""

    title: str = ""
    item_type: ChecklistType = Field(
        default=ChecklistType.PACKING,
        alias="type",
    )
    # Not checked against the trips collection
    trip_id: str = ""
    completed: bool = False


class Expense(Record):
    """
    A single expense.

    amount is stored as given, category is free text.
    date defaults to the creation time. Expenses written before
    createdAt was assigned have none.
    """

    created_at: Optional[str] = None
    description: str = ""
    amount: Union[int, float] = 0
    category: str = "Other"
    date: str = ""


class Contact(Record):
    """A custom emergency contact."""

    name: str = ""
    number: str = ""
    relationship: Optional[str] = None


class JournalEntry(Record):
    """A travel journal entry tied to a trip."""

    title: str = ""
    content: str = ""
    date: str = ""
    mood: str = "\U0001F600"
    trip_id: str = ""
    photo: Optional[str] = None


# =============================================================================
# PATCHES
# =============================================================================

class TripPatch(Patch):
    destination: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class ChecklistItemPatch(Patch):
    title: Optional[str] = None
    item_type: Optional[ChecklistType] = Field(default=None, alias="type")
    trip_id: Optional[str] = None
    completed: Optional[bool] = None


class ExpensePatch(Patch):
    description: Optional[str] = None
    amount: Optional[Union[int, float]] = None
    category: Optional[str] = None
    date: Optional[str] = None


class ContactPatch(Patch):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"relationship"})

    name: Optional[str] = None
    number: Optional[str] = None
    relationship: Optional[str] = None


class JournalEntryPatch(Patch):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"photo"})

    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[str] = None
    mood: Optional[str] = None
    trip_id: Optional[str] = None
    photo: Optional[str] = None


# =============================================================================
# SINGLE-OBJECT COLLECTIONS
# =============================================================================

class AppSettings(WireModel):
    """
    App-wide settings.

    Persisted partial objects are overlaid on these defaults.
    """

    theme: str = "light"
    language: str = "en"
    currency: str = "USD"
    has_completed_onboarding: bool = False


class SettingsPatch(Patch):
    theme: Optional[str] = None
    language: Optional[str] = None
    currency: Optional[str] = None
    has_completed_onboarding: Optional[bool] = None


class BudgetSettings(WireModel):
    """Budget preferences. No cap means the budget is unlimited."""

    budget_cap: Optional[float] = None


class BudgetSettingsPatch(Patch):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"budget_cap"})

    budget_cap: Optional[float] = None


# =============================================================================
# TYPED MERGE
# =============================================================================

RecordT = TypeVar("RecordT", bound=Record)
WireT = TypeVar("WireT", bound=WireModel)


def apply_patch(record: WireT, patch: Patch) -> WireT:
    """
    Overlay the fields set on `patch` onto `record`.

    Returns a new, validated instance of the record's own type.
    Fields the patch left unset keep their current value.
    """
    merged = {**record.to_wire(), **patch.to_wire()}
    return type(record).model_validate(merged)
