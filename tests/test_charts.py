"""Unit tests for farm_dashboard.analytics.charts."""

from __future__ import annotations

import pytest

from farm_dashboard.analytics import charts
from farm_dashboard.models import Budget, Expense, Farm


def sample_expenses():
    return [
        Expense(id=1, farm_id=1, category='seeds', amount=100, date='2024-01-05'),
        Expense(id=2, farm_id=1, category='fuel', amount=200, date='2024-02-10'),
        Expense(id=3, farm_id=2, category='seeds', amount=50, date='2024-02-11'),
        Expense(id=4, farm_id=1, category='seeds', amount=25, date='2024-03-01'),
    ]


def test_budget_donut_over_budget():
    donut = charts.budget_donut(600, 500)
    assert donut.labels == ['Used Budget', 'Over Budget']
    assert donut.data == [500, 100]
    assert donut.colors == charts.OVER_BUDGET_COLORS


def test_budget_donut_within_budget():
    donut = charts.budget_donut(300, 500)
    assert donut.labels == ['Used Budget', 'Remaining Budget']
    assert donut.data == [300, 200]
    assert donut.colors == charts.WITHIN_BUDGET_COLORS
    assert charts.budget_donut(500, 500).data == [500, 0]


def test_category_breakdown_applies_farm_and_date_filters():
    breakdown = charts.category_breakdown(sample_expenses(), {'farm_id': 1, 'end_date': '2024-02-28'})
    assert breakdown.labels == ['seeds', 'fuel']
    assert breakdown.data == pytest.approx([100, 200])
    assert breakdown.colors == charts.CATEGORY_COLORS[:2]


def test_category_breakdown_ignores_category_filter():
    breakdown = charts.category_breakdown(sample_expenses(), {'category': 'fuel'})
    assert breakdown.labels == ['seeds', 'fuel']
    assert breakdown.data == pytest.approx([175, 200])


def test_category_breakdown_replaces_underscores():
    expense = Expense(id=1, farm_id=1, category='other', amount=10, date='2024-01-01')
    expense.category = 'crop_insurance'
    breakdown = charts.category_breakdown([expense])
    assert breakdown.labels == ['crop insurance']


def test_category_breakdown_empty():
    breakdown = charts.category_breakdown([])
    assert (breakdown.labels, breakdown.data, breakdown.colors) == ([], [], [])


def test_expense_trend():
    trend = charts.expense_trend(sample_expenses(), {'farm_id': 1})
    assert trend.labels == ['Jan 2024', 'Feb 2024', 'Mar 2024']
    assert trend.data == pytest.approx([100, 200, 25])
    assert trend.colors == [charts.TREND_COLOR]


def test_budget_vs_actual_by_farm():
    farms = [Farm(id=1, name='North'), Farm(id=2, name='South')]
    budgets = [
        Budget(id=1, farm_id=1, period='annual', budget_amount=1000, start_date='2024-01-01'),
        Budget(id=2, farm_id=1, period='monthly', budget_amount=200, start_date='2024-01-01'),
    ]
    comparison = charts.budget_vs_actual_by_farm(farms, budgets, sample_expenses())
    assert comparison.labels == ['North', 'South']
    assert comparison.budgeted == [1200, 0]
    assert comparison.actual == [325, 50]

    single = charts.budget_vs_actual_by_farm(farms, budgets, sample_expenses(), farm_id=2)
    assert (single.labels, single.budgeted, single.actual) == (['South'], [0], [50])

    unknown = charts.budget_vs_actual_by_farm(farms, budgets, sample_expenses(), farm_id=9)
    assert unknown.labels == ['Unknown']
