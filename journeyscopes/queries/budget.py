"""
Budget and Trip Queries

Loads records from the store and runs the summaries over them.

GUARANTEES:
- Only reports figures computed from stored records
- Never invents or estimates
- An unreadable collection reads as empty, like every store reader
"""

from typing import Optional

from journeyscopes.models.records import ChecklistType
from journeyscopes.queries.summaries import (
    BudgetSummary,
    CategoryTotal,
    ChecklistProgress,
    TripReport,
    build_trip_report,
    category_breakdown,
    checklist_progress,
    summarize_budget,
    trip_duration_days,
)
from journeyscopes.store.record_store import LocalRecordStore


class BudgetQueries:
    """
    Read-only queries over a LocalRecordStore.

    Each call takes a fresh snapshot of the collections it needs.
    """

    def __init__(self, store: LocalRecordStore):
        self._store = store

    async def trip_report(self, trip_id: str) -> Optional[TripReport]:
        """The trip's expenses and their total, or None for an unknown trip."""
        trip = await self._store.trips.get(trip_id)
        if trip is None:
            return None
        expenses = await self._store.expenses.get_all()
        return build_trip_report(trip, expenses)

    async def trip_reports(self) -> list[TripReport]:
        trips = await self._store.trips.get_all()
        expenses = await self._store.expenses.get_all()
        return [build_trip_report(trip, expenses) for trip in trips]

    async def budget_summary(self, category: Optional[str] = None) -> BudgetSummary:
        """Spending against the stored budget cap, optionally for one category."""
        expenses = await self._store.expenses.get_all()
        cap = await self._store.budget_settings.get_cap()
        return summarize_budget(expenses, cap=cap, category=category)

    async def category_breakdown(self) -> list[CategoryTotal]:
        return category_breakdown(await self._store.expenses.get_all())

    async def checklist_progress(
        self,
        trip_id: Optional[str] = None,
        item_type: Optional[ChecklistType] = None,
    ) -> ChecklistProgress:
        items = await self._store.checklist.get_all()
        return checklist_progress(items, item_type=item_type, trip_id=trip_id)

    async def recent_trip_durations(self, limit: int = 6) -> list[tuple[str, int]]:
        """(destination, days) for the most recently added trips."""
        trips = await self._store.trips.get_all()
        recent = trips[-limit:] if limit > 0 else []
        return [(trip.destination, trip_duration_days(trip)) for trip in recent]
