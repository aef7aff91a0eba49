"""Tests for the single-object collections (app settings, budget settings)."""

import json

import pytest

from journeyscopes.models import AppSettings, Outcome, SettingsPatch, StoreEventType
from journeyscopes.store import LocalRecordStore

from conftest import FlakySubstrate


SETTINGS_KEY = "journeyscopes_settings"
BUDGET_SETTINGS_KEY = "journeyscopes_budget_settings"


class TestAppSettings:
    """Tests for app settings."""

    @pytest.mark.asyncio
    async def test_defaults_when_never_written(self, store):
        assert await store.settings.get() == AppSettings()

    @pytest.mark.asyncio
    async def test_partial_object_overlays_defaults(self, store):
        """Test that a stored partial object keeps the other defaults."""
        await store.store_data(SETTINGS_KEY, {"theme": "dark"})

        settings = await store.settings.get()
        assert settings.theme == "dark"
        assert settings.language == "en"
        assert settings.currency == "USD"
        assert settings.has_completed_onboarding is False

    @pytest.mark.asyncio
    async def test_update_merges_shallowly(self, store, substrate):
        await store.settings.update({"currency": "EUR"})
        await store.settings.update(SettingsPatch(has_completed_onboarding=True))

        raw = json.loads(substrate.snapshot()[SETTINGS_KEY])
        assert raw == {
            "theme": "light",
            "language": "en",
            "currency": "EUR",
            "hasCompletedOnboarding": True,
        }

    @pytest.mark.asyncio
    async def test_update_reported(self, store):
        await store.settings.update({"theme": "dark"})
        (event,) = store.events.events_for_key(SETTINGS_KEY)
        assert event.event_type == StoreEventType.SETTINGS_UPDATED
        assert event.details["fields"] == ["theme"]

    @pytest.mark.asyncio
    async def test_corrupt_settings_read_as_defaults(self, clock):
        substrate = FlakySubstrate({SETTINGS_KEY: "[1, 2]"})
        store = LocalRecordStore(substrate, clock=clock)

        assert await store.settings.get() == AppSettings()
        result = await store.settings.update({"theme": "dark"})
        assert result.outcome == Outcome.CORRUPT_DATA
        assert substrate.snapshot()[SETTINGS_KEY] == "[1, 2]"

    @pytest.mark.asyncio
    async def test_save_replaces(self, store):
        value = AppSettings(theme="dark", language="fr")
        assert (await store.settings.save(value)).ok
        assert await store.settings.get() == value


class TestBudgetSettings:
    """Tests for the budget cap."""

    @pytest.mark.asyncio
    async def test_no_cap_by_default(self, store):
        assert await store.budget_settings.get_cap() is None

    @pytest.mark.asyncio
    async def test_set_cap(self, store, substrate):
        assert (await store.budget_settings.set_cap("1500")).ok
        assert await store.budget_settings.get_cap() == 1500.0

        raw = json.loads(substrate.snapshot()[BUDGET_SETTINGS_KEY])
        assert raw == {"budgetCap": 1500.0}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [-1, float("inf"), float("nan")])
    async def test_set_cap_rejects_invalid(self, store, substrate, amount):
        with pytest.raises(ValueError):
            await store.budget_settings.set_cap(amount)
        assert substrate.set_calls == 0

    @pytest.mark.asyncio
    async def test_set_cap_rejects_text(self, store):
        with pytest.raises(ValueError):
            await store.budget_settings.set_cap("a lot")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
