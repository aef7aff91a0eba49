"""
Tests for summaries and BudgetQueries.

Money figures are Decimals rounded half-up to cents.
"""

from decimal import Decimal

import pytest

from journeyscopes.models import ChecklistItem, ChecklistType, Expense, Trip
from journeyscopes.queries import (
    BudgetQueries,
    category_breakdown,
    checklist_progress,
    expenses_for_trip,
    parse_day,
    sum_amounts,
    summarize_budget,
    to_decimal,
    trip_duration_days,
)


def expense(amount, category="Other", date="2024-05-02", record_id="e"):
    return Expense(
        id=record_id,
        created_at="2024-05-01T09:00:00.000Z",
        amount=amount,
        category=category,
        date=date,
    )


def trip(start="2024-05-01", end="2024-05-07", destination="Rome"):
    return Trip(
        id="t",
        created_at="2024-05-01T09:00:00.000Z",
        destination=destination,
        start_date=start,
        end_date=end,
    )


class TestHelpers:
    """Tests for amount and date parsing."""

    @pytest.mark.parametrize("value,expected", [
        (12.5, Decimal("12.5")),
        ("7.25", Decimal("7.25")),
        (None, Decimal("0")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
        (float("inf"), Decimal("0")),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("2024-05-01", "2024-05-01"),
        ("2024-05-01T23:30:00.000Z", "2024-05-01"),
        ("2024-05-01T10:00:00", "2024-05-01"),
        ("not a date", None),
        ("", None),
    ])
    def test_parse_day(self, value, expected):
        day = parse_day(value)
        assert (day.isoformat() if day else None) == expected


class TestExpenseSummaries:
    """Tests for totals and breakdowns."""

    def test_sum_is_exact(self):
        """Test that 12.50 + 7.25 is exactly 19.75."""
        assert sum_amounts([expense(12.50), expense(7.25)]) == Decimal("19.75")

    def test_sum_of_tenths(self):
        assert sum_amounts([expense(0.1)] * 3) == Decimal("0.30")

    def test_sum_empty(self):
        assert sum_amounts([]) == Decimal("0.00")

    def test_expenses_for_trip_inclusive(self):
        """Test that both trip end days count, whatever the time of day."""
        expenses = [
            expense(1, date="2024-04-30T23:59:00.000Z", record_id="before"),
            expense(2, date="2024-05-01", record_id="first-day"),
            expense(3, date="2024-05-07T21:15:00.000Z", record_id="last-evening"),
            expense(4, date="2024-05-08", record_id="after"),
            expense(5, date="garbage", record_id="undated"),
        ]
        matched = expenses_for_trip(trip(), expenses)
        assert [e.id for e in matched] == ["first-day", "last-evening"]

    def test_trip_without_dates_has_no_expenses(self):
        assert expenses_for_trip(trip(end=""), [expense(1)]) == []

    def test_category_breakdown(self):
        breakdown = category_breakdown([
            expense(30, "Food"),
            expense(10, "Transport"),
            expense(10, "Food"),
            expense(0, "Shopping"),
            expense(10, ""),
        ])
        assert [(c.category, c.amount, c.percentage) for c in breakdown] == [
            ("Food", Decimal("40.00"), Decimal("66.7")),
            ("Transport", Decimal("10.00"), Decimal("16.7")),
            ("Other", Decimal("10.00"), Decimal("16.7")),
        ]


class TestBudgetSummary:
    """Tests for spending against the cap."""

    def test_under_cap(self):
        summary = summarize_budget([expense(250)], cap=1000)
        assert summary.total == Decimal("250.00")
        assert summary.remaining == Decimal("750.00")
        assert summary.percentage_used == 25
        assert not summary.over_budget

    def test_over_cap(self):
        summary = summarize_budget([expense(1200)], cap=1000)
        assert summary.remaining == Decimal("0.00")
        assert summary.percentage_used == 100
        assert summary.over_budget

    @pytest.mark.parametrize("cap", [None, 0])
    def test_no_cap_counts_as_used(self, cap):
        summary = summarize_budget([expense(10)], cap=cap)
        assert summary.remaining == Decimal("0.00")
        assert summary.percentage_used == 100

    def test_category_filter(self):
        expenses = [expense(20, "Food"), expense(80, "Lodging")]
        assert summarize_budget(expenses, cap=100, category="Food").total == Decimal("20.00")
        assert summarize_budget(expenses, cap=100, category="All").total == Decimal("100.00")

    def test_huge_amounts(self):
        """Test that any finite amount sums to the cent without overflow."""
        summary = summarize_budget([expense(1e30), expense(0.01)], cap=1e30)
        assert summary.total == Decimal("1000000000000000000000000000000.01")
        assert summary.remaining == Decimal("0.00")
        assert summary.percentage_used == 100

        (total,) = category_breakdown([expense(1e300)])
        assert total.percentage == Decimal("100.0")


class TestChecklistAndTrips:
    """Tests for checklist progress and trip durations."""

    def _item(self, completed, item_type=ChecklistType.PACKING, trip_id="t"):
        return ChecklistItem(
            id="c",
            created_at="2024-05-01T09:00:00.000Z",
            item_type=item_type,
            trip_id=trip_id,
            completed=completed,
        )

    def test_progress(self):
        items = [
            self._item(True),
            self._item(False),
            self._item(True, ChecklistType.TASKS),
            self._item(False, trip_id="other"),
        ]
        progress = checklist_progress(items, item_type=ChecklistType.PACKING, trip_id="t")
        assert (progress.total, progress.completed, progress.percentage) == (2, 1, 50)

    def test_progress_empty(self):
        assert checklist_progress([]).percentage == 0

    @pytest.mark.parametrize("start,end,days", [
        ("2024-05-01", "2024-05-07", 6),
        ("2024-05-01", "2024-05-01", 1),
        ("2024-05-01", "", 1),
        ("someday", "2024-05-07", 1),
    ])
    def test_duration(self, start, end, days):
        assert trip_duration_days(trip(start, end)) == days


class TestBudgetQueries:
    """Tests for queries over a live store."""

    @pytest.mark.asyncio
    async def test_rome_trip_report(self, store):
        rome = (await store.trips.add({
            "destination": "Rome",
            "startDate": "2024-05-01",
            "endDate": "2024-05-07",
        })).value
        await store.expenses.add({"description": "Pasta", "amount": 12.50, "category": "Food"})
        await store.expenses.add({
            "description": "Museum",
            "amount": 7.25,
            "category": "Activities",
            "date": "2024-05-03",
        })
        await store.expenses.add({"description": "Souvenir", "amount": 5, "date": "2024-06-01"})

        report = await BudgetQueries(store).trip_report(rome.id)
        assert report.total == Decimal("19.75")
        assert report.expense_count == 2

    @pytest.mark.asyncio
    async def test_unknown_trip(self, store):
        assert await BudgetQueries(store).trip_report("nope") is None

    @pytest.mark.asyncio
    async def test_budget_summary_uses_stored_cap(self, store):
        await store.budget_settings.set_cap(100)
        await store.expenses.add({"description": "Hotel", "amount": 40})

        summary = await BudgetQueries(store).budget_summary()
        assert summary.cap == Decimal("100.00")
        assert summary.remaining == Decimal("60.00")
        assert summary.percentage_used == 40

    @pytest.mark.asyncio
    async def test_budget_summary_with_huge_cap(self, store):
        await store.budget_settings.set_cap(1e30)
        await store.expenses.add({"description": "Yacht", "amount": 1e30})

        summary = await BudgetQueries(store).budget_summary()
        assert summary.percentage_used == 100
        assert summary.remaining == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_checklist_progress(self, store):
        item = (await store.checklist.add({"title": "Passport", "tripId": "t"})).value
        await store.checklist.add({"title": "Charger", "tripId": "t"})
        await store.checklist.toggle(item.id)

        progress = await BudgetQueries(store).checklist_progress(trip_id="t")
        assert progress.completed == 1
        assert progress.percentage == 50

    @pytest.mark.asyncio
    async def test_recent_trip_durations(self, store):
        for n in range(8):
            await store.trips.add({
                "destination": f"Trip {n}",
                "startDate": "2024-05-01",
                "endDate": f"2024-05-0{n + 2}",
            })

        durations = await BudgetQueries(store).recent_trip_durations()
        assert durations[0] == ("Trip 2", 3)
        assert len(durations) == 6

    @pytest.mark.asyncio
    async def test_queries_on_empty_store(self, store):
        queries = BudgetQueries(store)
        assert await queries.trip_reports() == []
        assert await queries.category_breakdown() == []
        assert (await queries.budget_summary()).total == Decimal("0.00")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
