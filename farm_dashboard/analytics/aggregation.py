"""Expense aggregation utilities.

This module reduces collections of :class:`~farm_dashboard.models.Expense`
records into totals, category buckets and monthly trend series.  Every
function is pure: inputs are never mutated and results are recomputed on
each call.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from ..models import Expense, parse_date

EXPENSE_COLUMNS = ['id', 'farm_id', 'category', 'amount', 'date', 'description', 'vendor']

FILTER_PRESETS = ('all', 'this_month', 'last_month', 'this_year')

_FILTER_ALIASES = {
    'startDate': 'start_date',
    'endDate': 'end_date',
    'farmId': 'farm_id',
}


@dataclass(frozen=True)
class ExpenseFilters:
    """Independent AND predicates applied to expense collections.

    Date bounds are inclusive.  ``category`` and ``farm_id`` match exactly.
    A ``None`` field applies no restriction.
    """
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None
    farm_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.start_date is not None:
            object.__setattr__(self, 'start_date', parse_date(self.start_date, 'start_date'))
        if self.end_date is not None:
            object.__setattr__(self, 'end_date', parse_date(self.end_date, 'end_date'))
        if self.farm_id is not None:
            object.__setattr__(self, 'farm_id', int(self.farm_id))

    @classmethod
    def coerce(cls, filters: FiltersLike) -> 'ExpenseFilters':
        """Build filters from ``None``, a mapping or an existing instance."""
        if filters is None:
            return cls()
        if isinstance(filters, cls):
            return filters
        known = {'start_date', 'end_date', 'category', 'farm_id'}
        kwargs = {}
        for key, value in filters.items():
            key = _FILTER_ALIASES.get(key, key)
            if key in known and value not in (None, ''):
                kwargs[key] = value
        return cls(**kwargs)


FiltersLike = Union[ExpenseFilters, Mapping[str, Any], None]


@dataclass
class CategoryGroup:
    """Expenses of a single category with their running total."""
    total: float = 0.0
    count: int = 0
    records: List[Expense] = field(default_factory=list)


@dataclass
class TrendSeries:
    """Parallel label/value arrays for a monthly time series."""
    labels: List[str]
    data: List[float]


@dataclass
class ExpenseSummary:
    total: float
    count: int
    average: float


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Convert expense records into a DataFrame.

    The ``date`` column is converted to ``datetime64`` so it can be compared
    against timestamps and bucketed with ``.dt.to_period``.
    """
    rows = [
        {
            'id': expense.id,
            'farm_id': expense.farm_id,
            'category': expense.category,
            'amount': expense.amount,
            'date': expense.date,
            'description': expense.description,
            'vendor': expense.vendor,
        }
        for expense in expenses
    ]
    if not rows:
        frame = pd.DataFrame(columns=EXPENSE_COLUMNS)
        frame['amount'] = frame['amount'].astype(float)
        frame['date'] = pd.to_datetime(frame['date'])
        return frame
    frame = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    frame['date'] = pd.to_datetime(frame['date'])
    return frame


def _filter_mask(frame: pd.DataFrame, filters: ExpenseFilters) -> pd.Series:
    mask = pd.Series(True, index=frame.index)
    if filters.start_date is not None:
        mask &= frame['date'] >= pd.Timestamp(filters.start_date)
    if filters.end_date is not None:
        mask &= frame['date'] <= pd.Timestamp(filters.end_date)
    if filters.category is not None:
        mask &= frame['category'] == filters.category
    if filters.farm_id is not None:
        mask &= frame['farm_id'] == filters.farm_id
    return mask


def _filtered_frame(expenses: Iterable[Expense], filters: FiltersLike) -> pd.DataFrame:
    filters = ExpenseFilters.coerce(filters)
    frame = expenses_frame(expenses)
    if frame.empty:
        return frame
    return frame[_filter_mask(frame, filters)]


def filter_expenses(expenses: Iterable[Expense], filters: FiltersLike = None) -> List[Expense]:
    """Return the expenses matching every predicate in ``filters``.

    Input order is preserved.
    """
    filters = ExpenseFilters.coerce(filters)
    records = list(expenses)
    if not records:
        return []
    frame = expenses_frame(records)
    mask = _filter_mask(frame, filters)
    return [record for record, keep in zip(records, mask) if keep]


def sum_expenses(expenses: Iterable[Expense], filters: FiltersLike = None) -> float:
    """Sum ``amount`` over the filtered expenses.

    Example:
        >>> sum_expenses(expenses, {'category': 'fuel', 'farm_id': 1})
        450.0
    """
    frame = _filtered_frame(expenses, filters)
    if frame.empty:
        return 0.0
    return float(frame['amount'].sum())


def group_by_category(expenses: Iterable[Expense]) -> Dict[str, CategoryGroup]:
    """Bucket expenses by category.

    Keys appear in the order each category is first seen in the input.
    """
    groups: Dict[str, CategoryGroup] = {}
    for expense in expenses:
        group = groups.setdefault(expense.category, CategoryGroup())
        group.total += expense.amount
        group.count += 1
        group.records.append(expense)
    return groups


def monthly_trend(expenses: Iterable[Expense], filters: FiltersLike = None) -> TrendSeries:
    """Sum filtered expenses per calendar month.

    Buckets are sorted ascending by year-month and labelled ``"Jan 2024"``.
    Only months present in the input appear; empty months are not filled in.
    """
    frame = _filtered_frame(expenses, filters)
    if frame.empty:
        return TrendSeries(labels=[], data=[])

    monthly = frame.groupby(frame['date'].dt.to_period('M'))['amount'].sum().sort_index()
    return TrendSeries(
        labels=[period.strftime('%b %Y') for period in monthly.index],
        data=[float(value) for value in monthly.values],
    )


def preset_filters(preset: str, today: Optional[date] = None, farm_id: Optional[int] = None) -> ExpenseFilters:
    """Translate a quick-filter preset into date-bounded filters.

    Presets are ``all``, ``this_month``, ``last_month`` and ``this_year``,
    evaluated relative to ``today`` (defaults to the current date).
    """
    if preset not in FILTER_PRESETS:
        raise ValueError(f"Unknown expense filter preset: {preset!r}")

    today = today or date.today()
    base = ExpenseFilters(farm_id=farm_id)
    if preset == 'all':
        return base

    if preset == 'this_year':
        return replace(base, start_date=date(today.year, 1, 1), end_date=date(today.year, 12, 31))

    month = pd.Period(today, freq='M')
    if preset == 'last_month':
        month = month - 1
    return replace(
        base,
        start_date=month.start_time.date(),
        end_date=month.end_time.date(),
    )


def expense_summary(expenses: Iterable[Expense], filters: FiltersLike = None) -> ExpenseSummary:
    """Total, count and average of the filtered expenses."""
    frame = _filtered_frame(expenses, filters)
    count = len(frame)
    total = float(frame['amount'].sum()) if count else 0.0
    return ExpenseSummary(total=total, count=count, average=total / count if count else 0.0)
