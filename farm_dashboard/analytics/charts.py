"""Chart data adapters.

These functions reshape aggregation and budget results into
label/data/color triples that a charting widget can consume directly.
See :mod:`farm_dashboard.visualization` for the Plotly figures built on top.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from ..models import Budget, Expense, Farm, category_label
from .aggregation import ExpenseFilters, FiltersLike, filter_expenses, group_by_category, monthly_trend

CATEGORY_COLORS = [
    'rgba(59, 130, 246, 0.5)',
    'rgba(16, 185, 129, 0.5)',
    'rgba(245, 158, 11, 0.5)',
    'rgba(239, 68, 68, 0.5)',
    'rgba(139, 92, 246, 0.5)',
    'rgba(236, 72, 153, 0.5)',
    'rgba(14, 165, 233, 0.5)',
    'rgba(34, 197, 94, 0.5)',
    'rgba(168, 85, 247, 0.5)',
    'rgba(251, 146, 60, 0.5)',
]

TREND_COLOR = 'rgb(99, 102, 241)'
BUDGETED_COLOR = 'rgba(99, 102, 241, 0.5)'
ACTUAL_COLOR = 'rgba(239, 68, 68, 0.5)'

OVER_BUDGET_COLORS = ['rgba(239, 68, 68, 0.8)', 'rgba(185, 28, 28, 0.8)']
WITHIN_BUDGET_COLORS = ['rgba(59, 130, 246, 0.8)', 'rgba(229, 231, 235, 0.8)']


@dataclass
class ChartData:
    labels: List[str]
    data: List[float]
    colors: List[str] = field(default_factory=list)


@dataclass
class FarmComparison:
    """Grouped bar data: one budgeted and one actual value per farm."""
    labels: List[str]
    budgeted: List[float]
    actual: List[float]


def category_breakdown(expenses: Iterable[Expense], filters: FiltersLike = None) -> ChartData:
    """Spending per category for a pie/doughnut chart.

    Only the date and farm filters are applied; a category filter would
    collapse the breakdown to a single slice and is ignored.
    """
    scoped = replace(ExpenseFilters.coerce(filters), category=None)
    groups = group_by_category(filter_expenses(expenses, scoped))
    labels = [category_label(category) for category in groups]
    return ChartData(
        labels=labels,
        data=[group.total for group in groups.values()],
        colors=[CATEGORY_COLORS[i % len(CATEGORY_COLORS)] for i in range(len(labels))],
    )


def budget_donut(total_expenses: float, total_budget: float) -> ChartData:
    """Two-segment budget progress chart."""
    if total_expenses > total_budget:
        return ChartData(
            labels=['Used Budget', 'Over Budget'],
            data=[total_budget, total_expenses - total_budget],
            colors=list(OVER_BUDGET_COLORS),
        )
    return ChartData(
        labels=['Used Budget', 'Remaining Budget'],
        data=[total_expenses, total_budget - total_expenses],
        colors=list(WITHIN_BUDGET_COLORS),
    )


def expense_trend(expenses: Iterable[Expense], filters: FiltersLike = None) -> ChartData:
    trend = monthly_trend(expenses, filters)
    return ChartData(labels=trend.labels, data=trend.data, colors=[TREND_COLOR])


def budget_vs_actual_by_farm(
    farms: Iterable[Farm],
    budgets: Iterable[Budget],
    expenses: Iterable[Expense],
    farm_id: Optional[int] = None,
) -> FarmComparison:
    """Budgeted vs actual totals per farm.

    With ``farm_id`` set only that farm is shown; an id with no matching
    farm yields a single ``Unknown`` bar with zero values.
    """
    farms = list(farms)
    budgets = list(budgets)
    expenses = list(expenses)

    if farm_id is not None:
        selected = [farm for farm in farms if farm.id == int(farm_id)]
        if not selected:
            return FarmComparison(labels=['Unknown'], budgeted=[0.0], actual=[0.0])
    else:
        selected = farms

    return FarmComparison(
        labels=[farm.name for farm in selected],
        budgeted=[
            float(sum(b.budget_amount for b in budgets if b.farm_id == farm.id))
            for farm in selected
        ],
        actual=[
            float(sum(e.amount for e in expenses if e.farm_id == farm.id))
            for farm in selected
        ],
    )
