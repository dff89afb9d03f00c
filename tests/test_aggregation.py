"""Unit tests for farm_dashboard.analytics.aggregation."""

from __future__ import annotations

from datetime import date

import pytest

from farm_dashboard.analytics import aggregation as agg
from farm_dashboard.errors import InvalidDateError
from farm_dashboard.models import Expense


def _expense(id, amount, category='seeds', when='2024-01-05', farm_id=1):
    return Expense(id=id, farm_id=farm_id, category=category, amount=amount, date=when)


def sample_expenses():
    return [
        _expense(1, 100.0, 'seeds', '2024-01-05'),
        _expense(2, 200.0, 'fuel', '2024-02-10'),
        _expense(3, 50.5, 'seeds', '2024-02-28', farm_id=2),
        _expense(4, 75.0, 'labor', '2023-12-31', farm_id=2),
        _expense(5, 12.25, 'fuel', '2024-01-20'),
    ]


def test_sum_expenses_without_filters_matches_plain_sum():
    expenses = sample_expenses()
    assert agg.sum_expenses(expenses, {}) == pytest.approx(sum(e.amount for e in expenses))
    assert agg.sum_expenses(expenses) == pytest.approx(437.75)


def test_sum_expenses_empty_is_zero():
    assert agg.sum_expenses([], {}) == 0
    assert agg.sum_expenses([]) == 0.0


def test_sum_expenses_date_bounds_are_inclusive():
    expenses = sample_expenses()
    total = agg.sum_expenses(expenses, {'start_date': '2024-01-05', 'end_date': '2024-02-10'})
    assert total == pytest.approx(100.0 + 200.0 + 12.25)


def test_sum_expenses_filters_combine_as_and():
    expenses = sample_expenses()
    assert agg.sum_expenses(expenses, {'category': 'seeds', 'farm_id': 2}) == pytest.approx(50.5)
    assert agg.sum_expenses(expenses, {'category': 'fuel', 'farm_id': 2}) == 0.0


def test_sum_expenses_accepts_camel_case_keys():
    expenses = sample_expenses()
    assert agg.sum_expenses(expenses, {'farmId': 1, 'startDate': '2024-01-10'}) == pytest.approx(212.25)


def test_filter_bounds_reject_bad_dates():
    with pytest.raises(InvalidDateError):
        agg.sum_expenses(sample_expenses(), {'start_date': 'not a date'})


def test_filter_expenses_preserves_input_order():
    result = agg.filter_expenses(sample_expenses(), agg.ExpenseFilters(farm_id=1))
    assert [e.id for e in result] == [1, 2, 5]


def test_group_by_category_uses_first_seen_order():
    groups = agg.group_by_category(sample_expenses())
    assert list(groups) == ['seeds', 'fuel', 'labor']
    assert groups['seeds'].count == 2
    assert groups['seeds'].total == pytest.approx(150.5)
    assert [e.id for e in groups['fuel'].records] == [2, 5]


def test_group_by_category_partitions_total():
    expenses = sample_expenses()
    groups = agg.group_by_category(expenses)
    assert sum(g.total for g in groups.values()) == pytest.approx(agg.sum_expenses(expenses, {}))
    assert sum(g.count for g in groups.values()) == len(expenses)


def test_group_by_category_empty():
    assert agg.group_by_category([]) == {}


def test_monthly_trend_scenario():
    expenses = [
        _expense(1, 100, 'seeds', '2024-01-05'),
        _expense(2, 200, 'fuel', '2024-02-10'),
    ]
    trend = agg.monthly_trend(expenses)
    assert trend.labels == ['Jan 2024', 'Feb 2024']
    assert trend.data == [100, 200]


def test_monthly_trend_sorted_by_month_not_first_seen():
    trend = agg.monthly_trend(sample_expenses())
    assert trend.labels == ['Dec 2023', 'Jan 2024', 'Feb 2024']
    assert trend.data == pytest.approx([75.0, 112.25, 250.5])


def test_monthly_trend_skips_empty_months_and_applies_filters():
    expenses = [
        _expense(1, 10, 'seeds', '2024-01-05'),
        _expense(2, 20, 'seeds', '2024-04-05'),
        _expense(3, 30, 'fuel', '2024-04-06'),
    ]
    trend = agg.monthly_trend(expenses, {'category': 'seeds'})
    assert trend.labels == ['Jan 2024', 'Apr 2024']
    assert trend.data == [10, 20]


def test_monthly_trend_empty():
    trend = agg.monthly_trend([])
    assert trend.labels == []
    assert trend.data == []


def test_aggregations_are_idempotent():
    expenses = sample_expenses()
    assert agg.sum_expenses(expenses, {'farm_id': 1}) == agg.sum_expenses(expenses, {'farm_id': 1})
    assert agg.monthly_trend(expenses) == agg.monthly_trend(expenses)
    assert agg.group_by_category(expenses) == agg.group_by_category(expenses)


def test_expenses_frame_columns():
    frame = agg.expenses_frame(sample_expenses())
    assert list(frame.columns) == agg.EXPENSE_COLUMNS
    assert str(frame['date'].dtype).startswith('datetime64')
    assert agg.expenses_frame([]).empty


def test_preset_filters_this_and_last_month():
    today = date(2024, 3, 15)
    this_month = agg.preset_filters('this_month', today=today)
    assert (this_month.start_date, this_month.end_date) == (date(2024, 3, 1), date(2024, 3, 31))
    last_month = agg.preset_filters('last_month', today=today)
    assert (last_month.start_date, last_month.end_date) == (date(2024, 2, 1), date(2024, 2, 29))


def test_preset_filters_wraps_year_and_all():
    last_month = agg.preset_filters('last_month', today=date(2024, 1, 10))
    assert last_month.start_date == date(2023, 12, 1)
    this_year = agg.preset_filters('this_year', today=date(2024, 6, 1), farm_id=2)
    assert (this_year.start_date, this_year.end_date, this_year.farm_id) == (date(2024, 1, 1), date(2024, 12, 31), 2)
    assert agg.preset_filters('all') == agg.ExpenseFilters()


def test_preset_filters_unknown():
    with pytest.raises(ValueError):
        agg.preset_filters('next_week')


def test_expense_summary():
    summary = agg.expense_summary(sample_expenses(), {'farm_id': 2})
    assert summary.count == 2
    assert summary.total == pytest.approx(125.5)
    assert summary.average == pytest.approx(62.75)
    empty = agg.expense_summary([])
    assert (empty.total, empty.count, empty.average) == (0.0, 0, 0.0)
