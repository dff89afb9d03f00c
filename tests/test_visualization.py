"""Smoke tests for farm_dashboard.visualization."""

from __future__ import annotations

from farm_dashboard import visualization as viz
from farm_dashboard.analytics.charts import ChartData, FarmComparison, budget_donut


def test_empty_inputs_produce_placeholder_figures():
    empty = ChartData(labels=[], data=[])
    for fig in (
        viz.create_expense_trend_chart(empty),
        viz.create_category_pie_chart(empty),
        viz.create_budget_donut_chart(budget_donut(0, 0)),
        viz.create_budget_vs_actual_chart(FarmComparison(labels=[], budgeted=[], actual=[])),
    ):
        assert fig.layout.title.text == "No data to display"


def test_expense_trend_chart():
    fig = viz.create_expense_trend_chart(ChartData(labels=['Jan 2024', 'Feb 2024'], data=[100, 200]))
    assert list(fig.data[0].x) == ['Jan 2024', 'Feb 2024']
    assert list(fig.data[0].y) == [100, 200]


def test_category_pie_chart():
    fig = viz.create_category_pie_chart(ChartData(labels=['seeds', 'fuel'], data=[1, 2], colors=['red', 'blue']))
    assert fig.data[0].type == 'pie'
    assert list(fig.data[0].labels) == ['seeds', 'fuel']


def test_budget_donut_chart_annotation():
    fig = viz.create_budget_donut_chart(budget_donut(600, 500), utilization_pct=100)
    assert list(fig.data[0].labels) == ['Used Budget', 'Over Budget']
    assert fig.layout.annotations[0].text == '100.0%'


def test_budget_vs_actual_chart():
    fig = viz.create_budget_vs_actual_chart(FarmComparison(labels=['North'], budgeted=[10], actual=[5]))
    assert [trace.name for trace in fig.data] == ['Budgeted', 'Actual Expenses']
    assert fig.layout.barmode == 'group'
