"""Storage key layout."""

from pydantic import BaseModel, ConfigDict, Field


class StorageKeys(BaseModel):
    """
    Keys under which each collection is persisted.

    Every key is `<namespace>_<name>`. The namespace is injected so two
    stores can share one substrate without stepping on each other.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(default="journeyscopes", min_length=1)

    def _key(self, name: str) -> str:
        return f"{self.namespace}_{name}"

    @property
    def trips(self) -> str:
        return self._key("trips")

    @property
    def checklist(self) -> str:
        return self._key("checklist")

    @property
    def budget(self) -> str:
        return self._key("budget")

    @property
    def settings(self) -> str:
        return self._key("settings")

    @property
    def emergency_contacts(self) -> str:
        return self._key("emergency_contacts")

    @property
    def journal(self) -> str:
        return self._key("journal")

    @property
    def budget_settings(self) -> str:
        return self._key("budget_settings")

    def all(self) -> list[str]:
        return [
            self.trips,
            self.checklist,
            self.budget,
            self.settings,
            self.emergency_contacts,
            self.journal,
            self.budget_settings,
        ]
