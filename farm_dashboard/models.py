"""Record types for farms, crops, expenses and budgets.

Records are plain dataclasses validated on construction.  They are built
from mappings with :meth:`from_dict`, which accepts both snake_case field
names and the camelCase keys used by the browser-side data files
(``farmId``, ``budgetAmount``, ``startDate``...), and are serialised back
with :meth:`to_dict`.

Dates are parsed exactly once, here.  Anything that does not parse to a
calendar date raises :class:`~farm_dashboard.errors.InvalidDateError`.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

import pandas as pd

from .errors import InvalidDateError

EXPENSE_CATEGORIES: Dict[str, str] = {
    'seeds': 'Seeds & Plants',
    'fertilizer': 'Fertilizer',
    'pesticides': 'Pesticides',
    'fuel': 'Fuel',
    'equipment': 'Equipment',
    'maintenance': 'Maintenance',
    'labor': 'Labor',
    'utilities': 'Utilities',
    'insurance': 'Insurance',
    'other': 'Other',
}

BUDGET_CATEGORIES: Dict[str, str] = {'total': 'Total Budget', **EXPENSE_CATEGORIES}

BUDGET_PERIODS = ('monthly', 'annual')

CROP_STATUSES = (
    'planted',
    'germinating',
    'growing',
    'flowering',
    'harvesting',
    'harvested',
)

# camelCase keys found in exported data files
_ALIASES = {
    'Id': 'id',
    'farmId': 'farm_id',
    'budgetAmount': 'budget_amount',
    'startDate': 'start_date',
    'projectedYield': 'projected_yield',
    'sizeUnit': 'size_unit',
}


def parse_date(value: Any, field: str = 'date') -> date:
    """Parse ``value`` into a :class:`datetime.date`.

    Accepts ``date``/``datetime`` objects, pandas timestamps and strings that
    :func:`pandas.to_datetime` understands.  Numbers are rejected rather than
    read as epoch offsets.

    Raises:
        InvalidDateError: If the value is missing or cannot be parsed.
    """
    if value is pd.NaT:
        raise InvalidDateError(value, field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value, field)
    try:
        parsed = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise InvalidDateError(value, field) from exc
    if parsed is None or pd.isna(parsed):
        raise InvalidDateError(value, field)
    return parsed.date()


def _normalise_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in data.items()}


def _known_fields(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in _normalise_keys(data).items() if key in names}


def _non_negative(value: Any, field: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field} must be a number, got {value!r}") from exc
    if not math.isfinite(amount):
        raise ValueError(f"{field} must be a finite number, got {value!r}")
    if amount < 0:
        raise ValueError(f"{field} cannot be negative: {amount}")
    return amount


class _Record:
    """Shared mapping conversion for record dataclasses."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        return cls(**_known_fields(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, date):
                result[key] = value.isoformat()
        return result


@dataclass
class Farm(_Record):
    id: int
    name: str
    location: Optional[str] = None
    size: Optional[float] = None
    size_unit: str = 'acres'

    def __post_init__(self) -> None:
        self.id = int(self.id)
        if self.size is not None:
            self.size = _non_negative(self.size, 'size')


@dataclass
class Crop(_Record):
    id: int
    farm_id: int
    name: str
    status: str = 'planted'

    def __post_init__(self) -> None:
        self.id = int(self.id)
        self.farm_id = int(self.farm_id)
        if self.status not in CROP_STATUSES:
            raise ValueError(f"Unknown crop status: {self.status!r}")


@dataclass
class Expense(_Record):
    id: int
    farm_id: int
    category: str
    amount: float
    date: date
    description: str = ''
    vendor: Optional[str] = None

    def __post_init__(self) -> None:
        self.id = int(self.id)
        self.farm_id = int(self.farm_id)
        if self.category not in EXPENSE_CATEGORIES:
            raise ValueError(f"Unknown expense category: {self.category!r}")
        self.amount = _non_negative(self.amount, 'amount')
        self.date = parse_date(self.date)


@dataclass
class Budget(_Record):
    id: int
    farm_id: int
    period: str
    budget_amount: float
    start_date: date
    category: str = 'total'
    projected_yield: Optional[float] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.id = int(self.id)
        self.farm_id = int(self.farm_id)
        if self.period not in BUDGET_PERIODS:
            raise ValueError(f"Unknown budget period: {self.period!r}")
        if self.category not in BUDGET_CATEGORIES:
            raise ValueError(f"Unknown budget category: {self.category!r}")
        self.budget_amount = _non_negative(self.budget_amount, 'budget_amount')
        self.start_date = parse_date(self.start_date, 'start_date')
        if self.projected_yield is not None:
            self.projected_yield = float(self.projected_yield)


def category_label(category: str) -> str:
    """Return the chart label for a category key (underscores become spaces)."""
    return category.replace('_', ' ')
