"""Projected profit estimation.

Revenue is a rough estimate: each crop contributes ``base_yield *
status_multiplier * price`` where base yield and price come from a static
crop economics table.  Nothing here looks at crop area, farm size or market
data.  The table lives in ``defaults/crop_economics.json`` and can be
swapped by passing a :class:`CropEconomicsTable` explicitly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from ..config import CROP_ECONOMICS_FILE
from ..defaults import load_config
from ..models import Budget, Crop, Expense
from .aggregation import sum_expenses

HARVESTING_MULTIPLIER = 1.0
DEFAULT_STATUS_MULTIPLIER = 0.8


@dataclass(frozen=True)
class CropEconomics:
    base_yield: float
    price: float


@dataclass
class CropEconomicsTable:
    """Crop name to yield/price lookup with a fallback entry.

    Names are matched case-insensitively; unlisted crops use ``default``.
    """
    crops: Dict[str, CropEconomics] = field(default_factory=dict)
    default: CropEconomics = CropEconomics(base_yield=100.0, price=5.0)

    def __post_init__(self) -> None:
        self.crops = {name.strip().lower(): econ for name, econ in self.crops.items()}

    def lookup(self, crop_name: str) -> CropEconomics:
        return self.crops.get((crop_name or '').strip().lower(), self.default)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CropEconomicsTable':
        default = data.get('default') or {}
        crops = {
            name: CropEconomics(base_yield=float(entry['base_yield']), price=float(entry['price']))
            for name, entry in (data.get('crops') or {}).items()
        }
        return cls(
            crops=crops,
            default=CropEconomics(
                base_yield=float(default.get('base_yield', 100.0)),
                price=float(default.get('price', 5.0)),
            ),
        )


def _read_crop_economics(path: Path) -> CropEconomicsTable:
    return CropEconomicsTable.from_dict(load_config(path.stem, path.parent))


@lru_cache()
def _default_crop_economics() -> CropEconomicsTable:
    return _read_crop_economics(Path(CROP_ECONOMICS_FILE))


def load_crop_economics(path: Optional[Path] = None) -> CropEconomicsTable:
    """Load the crop economics table from JSON.

    The packaged default table is read once per process and shared; treat
    it as read-only.  An explicit ``path`` is always read from disk.

    Args:
        path: JSON file to read. Defaults to ``CROP_ECONOMICS_FILE``.
    """
    if path is None:
        return _default_crop_economics()
    return _read_crop_economics(Path(path))


@dataclass
class ProfitProjection:
    projected_revenue: float
    budgeted_expenses: float
    actual_expenses: float
    projected_profit: float
    actual_profit: float
    variance: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def status_multiplier(status: str) -> float:
    """Yield multiplier for a crop growth status."""
    return HARVESTING_MULTIPLIER if status == 'harvesting' else DEFAULT_STATUS_MULTIPLIER


def estimated_yield(crop: Crop, table: Optional[CropEconomicsTable] = None) -> float:
    table = table or load_crop_economics()
    return table.lookup(crop.name).base_yield * status_multiplier(crop.status)


def estimated_price(crop: Crop, table: Optional[CropEconomicsTable] = None) -> float:
    table = table or load_crop_economics()
    return table.lookup(crop.name).price


def projected_profit(
    crops: Iterable[Crop],
    budgets: Iterable[Budget],
    current_expenses: Iterable[Expense],
    table: Optional[CropEconomicsTable] = None,
) -> ProfitProjection:
    """Combine estimated crop revenue with budgeted and actual spend.

    Callers pre-filter the collections (e.g. by farm); everything passed in
    is counted.

    Example:
        >>> projected_profit([Crop(1, 1, 'Corn', 'growing')], [budget_500], [])
        ProfitProjection(projected_revenue=792.0, budgeted_expenses=500.0, ...)
    """
    table = table or load_crop_economics()
    revenue = sum(
        estimated_yield(crop, table) * estimated_price(crop, table)
        for crop in crops
    )
    budgeted = sum(budget.budget_amount for budget in budgets)
    actual = sum_expenses(current_expenses)

    profit = revenue - budgeted
    actual_profit = revenue - actual
    return ProfitProjection(
        projected_revenue=float(revenue),
        budgeted_expenses=float(budgeted),
        actual_expenses=float(actual),
        projected_profit=float(profit),
        actual_profit=float(actual_profit),
        variance=float(actual_profit - profit),
    )
