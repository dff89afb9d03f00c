"""Budget evaluation utilities.

``utilization`` and ``variance`` deliberately disagree about capping:
utilization is a progress-bar percentage clamped at 100, variance is the
signed deviation of actual spend from budget and is never clamped.  Both
return 0 when there is no budget to divide by.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ..models import Budget, Crop, Expense
from .aggregation import ExpenseFilters, filter_expenses, sum_expenses
from .profit import CropEconomicsTable, ProfitProjection, projected_profit

WARNING_UTILIZATION = 80.0

_PERIOD_OFFSETS = {
    'monthly': pd.DateOffset(months=1),
    'annual': pd.DateOffset(years=1),
}


def utilization(budget_amount: Optional[float], actual_amount: float) -> float:
    """Percentage of the budget consumed, capped at 100."""
    if not budget_amount or budget_amount <= 0:
        return 0.0
    return min(actual_amount / budget_amount * 100, 100.0)


def variance(budget_amount: Optional[float], actual_amount: float) -> float:
    """Signed percentage deviation of actual spend from budget.

    Positive values mean overspend.  Not capped.
    """
    if not budget_amount or budget_amount <= 0:
        return 0.0
    return (actual_amount - budget_amount) / budget_amount * 100


def budget_period_end(budget: Budget) -> date:
    """End of the budget period: start plus one month or one year.

    The end date itself belongs to the next period.  Month arithmetic clamps
    to the end of the target month, so a budget starting Jan 31 ends Feb 28/29.
    """
    end = pd.Timestamp(budget.start_date) + _PERIOD_OFFSETS[budget.period]
    return end.date()


def budget_last_day(budget: Budget) -> date:
    """Last calendar day counted against ``budget``."""
    return budget_period_end(budget) - timedelta(days=1)


def budget_window_expenses(budget: Budget, expenses: Iterable[Expense]) -> List[Expense]:
    """Expenses of the budget's farm (and category) inside its period.

    The window is ``[start_date, period_end)`` so consecutive budgets never
    share a day.
    """
    return filter_expenses(
        expenses,
        ExpenseFilters(
            start_date=budget.start_date,
            end_date=budget_last_day(budget),
            farm_id=budget.farm_id,
            category=None if budget.category == 'total' else budget.category,
        ),
    )


@dataclass
class BudgetStatus:
    budget: Budget
    period_end: date
    last_day: date
    spent: float
    utilization: float
    variance: float
    remaining: float
    status: str


def evaluate_budget(budget: Budget, expenses: Iterable[Expense]) -> BudgetStatus:
    """Compare a budget against the expenses that fall inside its period.

    ``status`` is ``over`` when spend exceeds the budget, ``warning`` above
    80% utilization and ``on_track`` otherwise.
    """
    spent = sum_expenses(budget_window_expenses(budget, expenses))
    used = utilization(budget.budget_amount, spent)
    if spent > budget.budget_amount:
        status = 'over'
    elif used > WARNING_UTILIZATION:
        status = 'warning'
    else:
        status = 'on_track'
    return BudgetStatus(
        budget=budget,
        period_end=budget_period_end(budget),
        last_day=budget_last_day(budget),
        spent=spent,
        utilization=used,
        variance=variance(budget.budget_amount, spent),
        remaining=budget.budget_amount - spent,
        status=status,
    )


def filter_budgets(
    budgets: Iterable[Budget],
    farm_id: Optional[int] = None,
    period: Optional[str] = None,
) -> List[Budget]:
    """Select budgets by farm and period; ``None`` or ``'all'`` keeps everything."""
    selected = []
    for budget in budgets:
        if farm_id is not None and budget.farm_id != int(farm_id):
            continue
        if period not in (None, 'all') and budget.period != period:
            continue
        selected.append(budget)
    return selected


@dataclass
class BudgetOverview:
    total_budgeted: float
    current_expenses: float
    utilization: float
    variance: float
    projection: ProfitProjection

    def to_dict(self) -> Dict[str, float]:
        return {
            'total_budgeted': self.total_budgeted,
            'current_expenses': self.current_expenses,
            'utilization': self.utilization,
            'budget_variance': self.variance,
            **self.projection.to_dict(),
        }


def budget_overview(
    budgets: Iterable[Budget],
    expenses: Iterable[Expense],
    crops: Iterable[Crop],
    farm_id: Optional[int] = None,
    period: Optional[str] = None,
    table: Optional[CropEconomicsTable] = None,
) -> BudgetOverview:
    """Summary figures for a farm/period selection.

    Budgets are filtered by farm and period; expenses and crops by farm only.
    """
    selected_budgets = filter_budgets(budgets, farm_id=farm_id, period=period)
    farm_expenses = filter_expenses(expenses, ExpenseFilters(farm_id=farm_id))
    farm_crops = [crop for crop in crops if farm_id is None or crop.farm_id == int(farm_id)]

    total_budgeted = float(sum(budget.budget_amount for budget in selected_budgets))
    current = sum_expenses(farm_expenses)
    return BudgetOverview(
        total_budgeted=total_budgeted,
        current_expenses=current,
        utilization=utilization(total_budgeted, current),
        variance=variance(total_budgeted, current),
        projection=projected_profit(farm_crops, selected_budgets, farm_expenses, table=table),
    )
