"""Streamlit app for the Farm Dashboard.

This module wires the record stores, the analytics package and the Plotly
figures into a single budget and expense page.  All numbers shown are
recomputed from the in-memory stores on every rerun.

To run the dashboard from the command line::

    streamlit run farm_dashboard/dashboard.py

or use ``run_dashboard.py`` at the repository root.
"""

from __future__ import annotations

import os
import sys
from typing import Dict, Iterable, List, Optional

import pandas as pd
import streamlit as st

# Support both ``streamlit run farm_dashboard/dashboard.py`` and package
# imports (``python -m farm_dashboard.dashboard``).
if __package__:
    from . import analytics
    from . import config
    from . import visualization as viz
    from .errors import RecordNotFoundError
    from .formatting import format_currency, format_date, format_percent
    from .models import BUDGET_CATEGORIES, Budget, Farm
    from .store import FarmDataStore
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from farm_dashboard import analytics  # type: ignore
    from farm_dashboard import config  # type: ignore
    from farm_dashboard import visualization as viz  # type: ignore
    from farm_dashboard.errors import RecordNotFoundError  # type: ignore
    from farm_dashboard.formatting import format_currency, format_date, format_percent  # type: ignore
    from farm_dashboard.models import BUDGET_CATEGORIES, Budget, Farm  # type: ignore
    from farm_dashboard.store import FarmDataStore  # type: ignore

ALL_FARMS = "All Farms"
PERIOD_OPTIONS = {"All Periods": "all", "Monthly Budgets": "monthly", "Annual Budgets": "annual"}
PRESET_OPTIONS = {
    "All Expenses": "all",
    "This Month": "this_month",
    "Last Month": "last_month",
    "This Year": "this_year",
}
STATUS_BADGES = {"over": "🔴 Over", "warning": "🟡 Warning", "on_track": "🟢 On track"}


def farm_options(farms: Iterable[Farm]) -> Dict[str, Optional[int]]:
    """Sidebar label -> farm id (``None`` for all farms)."""
    options: Dict[str, Optional[int]] = {ALL_FARMS: None}
    for farm in farms:
        options[farm.name] = farm.id
    return options


def total_budget_or_default(budgets: List[Budget], default: float) -> float:
    """Sum of the selected budgets, or ``default`` when none match."""
    if not budgets:
        return default
    return float(sum(budget.budget_amount for budget in budgets))


def budget_status_table(budgets: List[Budget], expenses, farms: Iterable[Farm]) -> pd.DataFrame:
    """One row per budget with its spend inside the budget period."""
    names = {farm.id: farm.name for farm in farms}
    rows = []
    for budget in sorted(budgets, key=lambda b: b.start_date, reverse=True):
        status = analytics.evaluate_budget(budget, expenses)
        rows.append({
            'Farm': names.get(budget.farm_id, 'Unknown'),
            'Category': BUDGET_CATEGORIES.get(budget.category, budget.category),
            'Period': budget.period,
            'Window': f"{format_date(budget.start_date)} - {format_date(status.last_day)}",
            'Budget': format_currency(budget.budget_amount),
            'Spent': format_currency(status.spent),
            'Utilization': format_percent(status.utilization),
            'Variance': format_percent(status.variance, signed=True),
            'Status': STATUS_BADGES[status.status],
        })
    return pd.DataFrame(rows)


def _get_store() -> FarmDataStore:
    if 'farm_store' not in st.session_state:
        try:
            st.session_state['farm_store'] = FarmDataStore.from_file(config.get_data_file())
        except (OSError, ValueError) as exc:  # pragma: no cover - UI display only
            st.error(f"Failed to load farm data: {exc}")
            st.session_state['farm_store'] = FarmDataStore()
    return st.session_state['farm_store']


def _render_budget_section(store: FarmDataStore, farm_id: Optional[int], period: str) -> None:
    budgets = store.budgets.list()
    expenses = store.expenses.list()
    farms = store.farms.list()

    overview = analytics.budget_overview(budgets, expenses, store.crops.list(), farm_id=farm_id, period=period)
    cols = st.columns(4)
    cols[0].metric("Total Budgeted", format_currency(overview.total_budgeted))
    cols[1].metric("Current Expenses", format_currency(overview.current_expenses))
    cols[2].metric("Budget Utilization", format_percent(overview.utilization))
    cols[3].metric(
        "Projected Profit",
        format_currency(overview.projection.projected_profit),
        delta=format_currency(overview.projection.variance),
    )
    st.progress(min(int(overview.utilization), 100))

    selected = analytics.filter_budgets(budgets, farm_id=farm_id, period=period)
    comparison = analytics.budget_vs_actual_by_farm(farms, selected, expenses, farm_id=farm_id)
    st.plotly_chart(viz.create_budget_vs_actual_chart(comparison), use_container_width=True)

    if selected:
        st.dataframe(budget_status_table(selected, expenses, farms), use_container_width=True, hide_index=True)
    else:
        st.info("No budgets found. Create a budget to start tracking expenses for your farms.")


def _render_expense_section(store: FarmDataStore, farm_id: Optional[int], preset: str) -> None:
    filters = analytics.preset_filters(preset, farm_id=farm_id)
    expenses = store.expenses.list()
    summary = analytics.expense_summary(expenses, filters)
    if summary.count == 0:
        st.info("No expenses recorded for this selection.")
        return

    budgets = analytics.filter_budgets(store.budgets.list(), farm_id=farm_id)
    total_budget = total_budget_or_default(budgets, config.get_default_total_budget())
    used = analytics.utilization(total_budget, summary.total)

    cols = st.columns(4)
    cols[0].metric("Total Expenses", format_currency(summary.total))
    cols[1].metric("Transactions", summary.count)
    cols[2].metric("Average Expense", format_currency(summary.average))
    cols[3].metric(
        "Budget Variance",
        format_percent(analytics.variance(total_budget, summary.total), signed=True),
        help=f"{format_currency(total_budget)} budgeted",
    )

    left, middle, right = st.columns(3)
    left.plotly_chart(
        viz.create_expense_trend_chart(analytics.expense_trend(expenses, filters)),
        use_container_width=True,
    )
    middle.plotly_chart(
        viz.create_category_pie_chart(analytics.category_breakdown(expenses, filters)),
        use_container_width=True,
    )
    right.plotly_chart(
        viz.create_budget_donut_chart(analytics.budget_donut(summary.total, total_budget), used),
        use_container_width=True,
    )


def _render_delete_expense(store: FarmDataStore) -> None:
    with st.sidebar.expander("Delete expense"):
        expense_id = st.number_input("Expense id", min_value=1, step=1)
        if st.button("Delete"):
            try:
                store.expenses.delete(int(expense_id))
                st.success(f"Expense {int(expense_id)} deleted")
            except RecordNotFoundError as exc:
                st.error(str(exc))


def main() -> None:
    """Entry point for the Streamlit app."""
    config.configure_logging()
    st.set_page_config(page_title="Farm Dashboard", layout="wide", initial_sidebar_state="expanded")
    st.title("Farm Budget & Expenses")

    store = _get_store()
    st.sidebar.header("Filters")
    farms = farm_options(store.farms.list())
    farm_id = farms[st.sidebar.selectbox("Farm", options=list(farms))]
    period = PERIOD_OPTIONS[st.sidebar.selectbox("Budget period", options=list(PERIOD_OPTIONS))]
    preset = PRESET_OPTIONS[st.sidebar.selectbox("Expenses", options=list(PRESET_OPTIONS))]
    _render_delete_expense(store)

    st.header("Budget")
    _render_budget_section(store, farm_id, period)
    st.header("Expenses")
    _render_expense_section(store, farm_id, preset)


if __name__ == "__main__":
    main()
