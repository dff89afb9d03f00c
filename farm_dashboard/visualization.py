"""Plotly visualisation helpers for the Farm Dashboard.

This module defines a small suite of functions that accept the chart data
objects returned by :mod:`farm_dashboard.analytics.charts` and produce
interactive Plotly figures.  Each function is focused on a specific chart
type: the monthly expense trend, the category breakdown, the budget
progress doughnut and the budget vs actual comparison per farm.

All functions return a `plotly.graph_objects.Figure` instance that
Streamlit can render via ``st.plotly_chart``.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .analytics.charts import (
    ACTUAL_COLOR,
    BUDGETED_COLOR,
    TREND_COLOR,
    ChartData,
    FarmComparison,
)


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_expense_trend_chart(trend: ChartData, title: str | None = None) -> go.Figure:
    """Generate a line chart of monthly expense totals.

    Parameters
    ----------
    trend : ChartData
        Month labels and summed amounts, as returned by
        :func:`~farm_dashboard.analytics.charts.expense_trend`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Interactive line chart.
    """
    if not trend.labels:
        return _empty_figure()
    df = pd.DataFrame({"Month": trend.labels, "Amount": trend.data})
    fig = px.line(df, x="Month", y="Amount", markers=True)
    fig.update_traces(line_color=(trend.colors or [TREND_COLOR])[0])
    fig.update_layout(
        title=title or "Expense trends",
        xaxis_title="Month",
        yaxis_title="Amount ($)",
    )
    return fig


def create_category_pie_chart(breakdown: ChartData, title: str | None = None) -> go.Figure:
    """Generate a doughnut chart of spending by category.

    Parameters
    ----------
    breakdown : ChartData
        Category labels, totals and slice colors.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart.
    """
    if not breakdown.labels:
        return _empty_figure()
    fig = go.Figure(
        go.Pie(
            labels=breakdown.labels,
            values=breakdown.data,
            marker={"colors": breakdown.colors or None},
            hole=0.4,
        )
    )
    fig.update_layout(title=title or "Expenses by category")
    return fig


def create_budget_donut_chart(
    donut: ChartData,
    utilization_pct: float | None = None,
    title: str | None = None,
) -> go.Figure:
    """Render the used/remaining (or used/over) budget doughnut.

    When ``utilization_pct`` is given it is printed in the centre of the
    doughnut.
    """
    if not any(donut.data):
        return _empty_figure()
    fig = go.Figure(
        go.Pie(
            labels=donut.labels,
            values=donut.data,
            marker={"colors": donut.colors or None},
            hole=0.6,
            sort=False,
        )
    )
    if utilization_pct is not None:
        fig.add_annotation(text=f"{utilization_pct:.1f}%", showarrow=False, font={"size": 20})
    fig.update_layout(title=title or "Budget progress")
    return fig


def create_budget_vs_actual_chart(comparison: FarmComparison, title: str | None = None) -> go.Figure:
    """Grouped bar chart of budgeted vs actual spend per farm.

    Parameters
    ----------
    comparison : FarmComparison
        Farm labels with one budgeted and one actual value each.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Grouped bar chart.
    """
    if not comparison.labels:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Budgeted", x=comparison.labels, y=comparison.budgeted, marker_color=BUDGETED_COLOR))
    fig.add_trace(go.Bar(name="Actual Expenses", x=comparison.labels, y=comparison.actual, marker_color=ACTUAL_COLOR))
    fig.update_layout(
        title=title or "Budget vs actual expenses",
        barmode="group",
        xaxis_title="Farm",
        yaxis_title="Amount ($)",
    )
    return fig
