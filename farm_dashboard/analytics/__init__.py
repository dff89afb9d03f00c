"""Budget and expense analytics.

This package provides the pure computation layer of the dashboard:
- Expense aggregation (totals, category buckets, monthly trends)
- Budget evaluation (utilization, variance, per-budget status)
- Projected profit from the crop economics table
- Chart data adapters for the visualisation layer
"""

from .aggregation import (
    CategoryGroup,
    ExpenseFilters,
    ExpenseSummary,
    TrendSeries,
    expense_summary,
    expenses_frame,
    filter_expenses,
    group_by_category,
    monthly_trend,
    preset_filters,
    sum_expenses,
)
from .budgets import (
    BudgetOverview,
    BudgetStatus,
    budget_overview,
    budget_last_day,
    budget_period_end,
    budget_window_expenses,
    evaluate_budget,
    filter_budgets,
    utilization,
    variance,
)
from .profit import (
    CropEconomics,
    CropEconomicsTable,
    ProfitProjection,
    estimated_price,
    estimated_yield,
    load_crop_economics,
    projected_profit,
    status_multiplier,
)
from .charts import (
    ChartData,
    FarmComparison,
    budget_donut,
    budget_vs_actual_by_farm,
    category_breakdown,
    expense_trend,
)

__all__ = [
    # Aggregation
    'CategoryGroup',
    'ExpenseFilters',
    'ExpenseSummary',
    'TrendSeries',
    'expense_summary',
    'expenses_frame',
    'filter_expenses',
    'group_by_category',
    'monthly_trend',
    'preset_filters',
    'sum_expenses',
    # Budgets
    'BudgetOverview',
    'BudgetStatus',
    'budget_overview',
    'budget_last_day',
    'budget_period_end',
    'budget_window_expenses',
    'evaluate_budget',
    'filter_budgets',
    'utilization',
    'variance',
    # Profit
    'CropEconomics',
    'CropEconomicsTable',
    'ProfitProjection',
    'estimated_price',
    'estimated_yield',
    'load_crop_economics',
    'projected_profit',
    'status_multiplier',
    # Charts
    'ChartData',
    'FarmComparison',
    'budget_donut',
    'budget_vs_actual_by_farm',
    'category_breakdown',
    'expense_trend',
]
