#!/usr/bin/env python3
"""Print budget and expense analytics for a farm data file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd

from farm_dashboard import analytics, config
from farm_dashboard.formatting import format_currency, format_percent
from farm_dashboard.store import FarmDataStore


def build_report(store: FarmDataStore, farm_id: Optional[int] = None, period: str = 'all') -> str:
    expenses = store.expenses.list()
    overview = analytics.budget_overview(
        store.budgets.list(), expenses, store.crops.list(), farm_id=farm_id, period=period,
    )
    lines: List[str] = [
        f"Total budgeted:    {format_currency(overview.total_budgeted)}",
        f"Current expenses:  {format_currency(overview.current_expenses)}",
        f"Utilization:       {format_percent(overview.utilization)}",
        f"Variance:          {format_percent(overview.variance, signed=True)}",
        f"Projected revenue: {format_currency(overview.projection.projected_revenue)}",
        f"Projected profit:  {format_currency(overview.projection.projected_profit)}",
        f"Actual profit:     {format_currency(overview.projection.actual_profit)}",
    ]

    budgets = analytics.filter_budgets(store.budgets.list(), farm_id=farm_id, period=period)
    if budgets:
        rows = []
        for budget in budgets:
            status = analytics.evaluate_budget(budget, expenses)
            rows.append({
                'id': budget.id,
                'farm': budget.farm_id,
                'category': budget.category,
                'period': budget.period,
                'budget': budget.budget_amount,
                'spent': status.spent,
                'utilization': round(status.utilization, 1),
                'variance': round(status.variance, 1),
                'status': status.status,
            })
        lines += ["", "Budgets:", pd.DataFrame(rows).to_string(index=False)]

    breakdown = analytics.category_breakdown(expenses, {'farm_id': farm_id})
    if breakdown.labels:
        series = pd.Series(breakdown.data, index=breakdown.labels, name='total')
        lines += ["", "By category:", series.to_string()]

    trend = analytics.monthly_trend(expenses, {'farm_id': farm_id})
    if trend.labels:
        series = pd.Series(trend.data, index=trend.labels, name='total')
        lines += ["", "By month:", series.to_string()]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--data', type=Path, default=None, help='JSON data file (defaults to FARMAPP_DATA_FILE)')
    parser.add_argument('--farm', type=int, default=None, help='Restrict to a farm id')
    parser.add_argument('--period', choices=['all', 'monthly', 'annual'], default='all')
    args = parser.parse_args(argv)

    config.configure_logging()
    store = FarmDataStore.from_file(args.data)
    print(build_report(store, farm_id=args.farm, period=args.period))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
