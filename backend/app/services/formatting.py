"""Display formatting for renewal figures (US locale)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Union

from app.rent_engine.money import round2

Amount = Union[Decimal, int, float]


def format_currency(amount: Amount) -> str:
    """1234.56 -> '$1,234.56'; -5 -> '-$5.00'."""
    value = round2(amount)
    if value == 0:
        value = abs(value)  # no '-$0.00'
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def format_percent(pct: Amount) -> str:
    """3.25 -> '3.25%'; 0 -> '0.00%'."""
    return f"{round2(pct):.2f}%"


def format_lease_date(day: date) -> str:
    """date(2024, 8, 1) -> 'Aug 1, 2024'."""
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def format_numeric_date(day: date, sep: str = "/") -> str:
    """date(2024, 8, 1) -> '08/01/2024'."""
    return f"{day.month:02d}{sep}{day.day:02d}{sep}{day.year}"
