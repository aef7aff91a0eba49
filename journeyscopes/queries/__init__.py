"""Query package."""

from journeyscopes.queries.budget import BudgetQueries
from journeyscopes.queries.summaries import (
    BudgetSummary,
    CategoryTotal,
    ChecklistProgress,
    TripReport,
    build_trip_report,
    category_breakdown,
    checklist_progress,
    expenses_for_trip,
    filter_by_category,
    parse_day,
    sum_amounts,
    summarize_budget,
    to_decimal,
    trip_duration_days,
)

__all__ = [
    "BudgetQueries",
    "BudgetSummary",
    "CategoryTotal",
    "ChecklistProgress",
    "TripReport",
    "build_trip_report",
    "category_breakdown",
    "checklist_progress",
    "expenses_for_trip",
    "filter_by_category",
    "parse_day",
    "sum_amounts",
    "summarize_budget",
    "to_decimal",
    "trip_duration_days",
]
