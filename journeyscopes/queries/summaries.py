"""
Summaries over Store Records

DESIGN DECISION: Every figure is computed deterministically from the
records the store returns. Money is summed as Decimal and rounded
half-up to cents once, at the end, so 12.50 + 7.25 is exactly 19.75.

These are plain functions over lists of records; BudgetQueries in
journeyscopes.queries.budget loads the records and calls them.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Iterable, Optional, Union

from pydantic import BaseModel, Field

from journeyscopes.models.records import ChecklistItem, ChecklistType, Expense, Trip


CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")
DEFAULT_CATEGORY = "Other"
ALL_CATEGORIES = "All"

# Wide enough to hold any finite float amount to the cent
MONEY_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


# =============================================================================
# RESULT MODELS
# =============================================================================

class CategoryTotal(BaseModel):
    category: str
    amount: Decimal
    percentage: Decimal = Field(description="Share of the overall total, one decimal")


class BudgetSummary(BaseModel):
    """Spending against the budget cap."""

    total: Decimal
    cap: Optional[Decimal] = None
    remaining: Decimal = Field(description="Cap minus total, never below zero")
    percentage_used: int = Field(ge=0, le=100)

    @property
    def over_budget(self) -> bool:
        return self.cap is not None and self.total > self.cap


class ChecklistProgress(BaseModel):
    total: int = Field(ge=0)
    completed: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)


class TripReport(BaseModel):
    """A trip with the expenses that fall inside its dates."""

    trip: Trip
    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal = Decimal("0.00")

    @property
    def expense_count(self) -> int:
        return len(self.expenses)


# =============================================================================
# HELPERS
# =============================================================================

def to_decimal(amount: Union[float, int, str, Decimal, None]) -> Decimal:
    """Convert a stored amount to Decimal; unparsable or missing counts as 0."""
    if amount is None or amount == "":
        return Decimal("0")
    try:
        value = Decimal(str(amount))
    except ArithmeticError:
        return Decimal("0")
    return value if value.is_finite() else Decimal("0")


def parse_day(value: Optional[str]) -> Optional[date]:
    """
    Calendar day of a free-form date string.

    Accepts plain dates ("2024-05-01") and ISO timestamps
    ("2024-05-01T09:30:00.000Z"). Returns None if unparsable.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _rounded_percent(part: Decimal, whole: Decimal) -> int:
    with localcontext(MONEY_CONTEXT):
        return int((part / whole * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# EXPENSES
# =============================================================================

def sum_amounts(expenses: Iterable[Expense]) -> Decimal:
    """Exact sum of expense amounts, rounded half-up to cents."""
    with localcontext(MONEY_CONTEXT):
        total = sum((to_decimal(expense.amount) for expense in expenses), Decimal("0"))
        return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def filter_by_category(
    expenses: Iterable[Expense],
    category: Optional[str] = None,
) -> list[Expense]:
    """Expenses of one category; None or "All" keeps everything."""
    if category is None or category == ALL_CATEGORIES:
        return list(expenses)
    return [expense for expense in expenses if expense.category == category]


def expenses_for_trip(trip: Trip, expenses: Iterable[Expense]) -> list[Expense]:
    """
    Expenses dated within the trip, both ends inclusive.

    Compares calendar days, so an expense logged in the evening of the
    last day still belongs to the trip. A trip missing either date has
    no expenses.
    """
    start = parse_day(trip.start_date)
    end = parse_day(trip.end_date)
    if start is None or end is None:
        return []

    matched = []
    for expense in expenses:
        day = parse_day(expense.date)
        if day is not None and start <= day <= end:
            matched.append(expense)
    return matched


def build_trip_report(trip: Trip, expenses: Iterable[Expense]) -> TripReport:
    trip_expenses = expenses_for_trip(trip, expenses)
    return TripReport(
        trip=trip,
        expenses=trip_expenses,
        total=sum_amounts(trip_expenses),
    )


def category_breakdown(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """
    Per-category totals in first-seen order.

    Missing categories count as "Other". Categories whose total is
    zero are left out.
    """
    with localcontext(MONEY_CONTEXT):
        totals: dict[str, Decimal] = {}
        for expense in expenses:
            category = expense.category or DEFAULT_CATEGORY
            totals[category] = totals.get(category, Decimal("0")) + to_decimal(expense.amount)

        overall = sum(totals.values(), Decimal("0"))
        breakdown = []
        for category, amount in totals.items():
            if amount <= 0:
                continue
            percentage = (
                (amount / overall * 100).quantize(TENTHS, rounding=ROUND_HALF_UP)
                if overall > 0
                else Decimal("0.0")
            )
            breakdown.append(CategoryTotal(
                category=category,
                amount=amount.quantize(CENTS, rounding=ROUND_HALF_UP),
                percentage=percentage,
            ))
        return breakdown


def summarize_budget(
    expenses: Iterable[Expense],
    cap: Union[float, Decimal, None] = None,
    category: Optional[str] = None,
) -> BudgetSummary:
    """
    Total spent against an optional cap.

    Without a cap (or with a zero cap) nothing remains and the budget
    counts as fully used.
    """
    total = sum_amounts(filter_by_category(expenses, category))
    with localcontext(MONEY_CONTEXT):
        cap_value = to_decimal(cap).quantize(CENTS) if cap is not None else None

        if not cap_value:
            return BudgetSummary(
                total=total,
                cap=cap_value,
                remaining=Decimal("0.00"),
                percentage_used=100,
            )

        remaining = max(cap_value - total, Decimal("0.00"))
    percentage = max(min(_rounded_percent(total, cap_value), 100), 0)
    return BudgetSummary(
        total=total,
        cap=cap_value,
        remaining=remaining,
        percentage_used=percentage,
    )


# =============================================================================
# CHECKLISTS AND TRIPS
# =============================================================================

def checklist_progress(
    items: Iterable[ChecklistItem],
    item_type: Optional[ChecklistType] = None,
    trip_id: Optional[str] = None,
) -> ChecklistProgress:
    selected = [
        item for item in items
        if (item_type is None or item.item_type == item_type)
        and (trip_id is None or item.trip_id == trip_id)
    ]
    total = len(selected)
    completed = sum(1 for item in selected if item.completed)
    percentage = _rounded_percent(Decimal(completed), Decimal(total)) if total else 0
    return ChecklistProgress(total=total, completed=completed, percentage=percentage)


def trip_duration_days(trip: Trip) -> int:
    """Whole days from start to end (end defaults to start); at least 1."""
    start = parse_day(trip.start_date)
    end = parse_day(trip.end_date) or start
    if start is None or end is None:
        return 1
    return max((end - start).days, 1)
