"""Formatting utilities for currency, percentages and dates."""

from __future__ import annotations

from datetime import date
from typing import Union


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-50)
        '-$50.00'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = '-' if amount < 0 else ''
    return f"{prefix}${formatted}" if include_sign else f"{prefix}{formatted}"


def format_percent(value: float, signed: bool = False) -> str:
    """Format a percentage with one decimal place.

    Example:
        >>> format_percent(20, signed=True)
        '+20.0%'
    """
    if signed and value > 0:
        return f"+{value:.1f}%"
    return f"{value:.1f}%"


def format_date(value: date) -> str:
    """Format a date as ``Jan 5, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"
