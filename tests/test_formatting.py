from datetime import date

from farm_dashboard.formatting import format_currency, format_date, format_percent


def test_format_currency():
    assert format_currency(1234.56) == '$1,234.56'
    assert format_currency(1234.56, include_sign=False) == '1,234.56'
    assert format_currency(-50) == '-$50.00'


def test_format_percent():
    assert format_percent(20, signed=True) == '+20.0%'
    assert format_percent(-12.345, signed=True) == '-12.3%'
    assert format_percent(74.00625) == '74.0%'


def test_format_date():
    assert format_date(date(2024, 1, 5)) == 'Jan 5, 2024'
