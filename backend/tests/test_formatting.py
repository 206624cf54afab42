"""Tests for display formatting helpers and penny rounding."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.rent_engine.money import apply_increase, round2
from app.services.formatting import (
    format_currency,
    format_lease_date,
    format_numeric_date,
    format_percent,
)


class TestRound2:

    def test_half_up(self):
        assert round2(Decimal("0.125")) == Decimal("0.13")
        assert round2(Decimal("2.675")) == Decimal("2.68")

    def test_float_goes_through_str(self):
        # round(2.675, 2) gives 2.67 on binary floats
        assert round2(2.675) == Decimal("2.68")

    def test_negative(self):
        assert round2(Decimal("-0.125")) == Decimal("-0.13")

    def test_apply_increase(self):
        assert apply_increase(Decimal("2000"), Decimal("3.25")) == Decimal("2065.00")
        assert apply_increase("1234.56", 3) == Decimal("1271.60")
        assert apply_increase(Decimal("2000"), 0) == Decimal("2000.00")


class TestFormatCurrency:

    def test_basic(self):
        assert format_currency(1234.56) == "$1,234.56"
        assert format_currency(0) == "$0.00"
        assert format_currency(1000000) == "$1,000,000.00"

    def test_decimal(self):
        assert format_currency(Decimal("1866.04")) == "$1,866.04"

    def test_rounds_to_cents(self):
        assert format_currency(Decimal("37.0368")) == "$37.04"

    def test_negative(self):
        assert format_currency(Decimal("-5")) == "-$5.00"

    def test_negative_zero(self):
        assert format_currency(Decimal("-0.001")) == "$0.00"


class TestFormatPercent:

    def test_basic(self):
        assert format_percent(3.25) == "3.25%"
        assert format_percent(0) == "0.00%"
        assert format_percent(100) == "100.00%"

    def test_decimal(self):
        assert format_percent(Decimal("3.2")) == "3.20%"


class TestFormatDates:

    def test_lease_date(self):
        assert format_lease_date(date(2024, 8, 1)) == "Aug 1, 2024"
        assert format_lease_date(date(2023, 12, 25)) == "Dec 25, 2023"

    def test_numeric_date(self):
        assert format_numeric_date(date(2024, 8, 1)) == "08/01/2024"
        assert format_numeric_date(date(2024, 8, 1), sep="-") == "08-01-2024"
