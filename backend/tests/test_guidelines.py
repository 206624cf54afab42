"""Tests for guideline lookup by lease start date."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from app.rent_engine.guidelines import find_guideline
from app.rent_engine.rgb_orders import RGB_ORDERS, RGBOrder
from app.rent_engine.rules import FlatRule, SplitRule


class TestFindGuideline:

    def test_order_55_one_year(self):
        match = find_guideline(date(2024, 8, 1), 1)
        assert match is not None
        assert match.order.order_number == 55
        assert match.rule == FlatRule(Decimal("3.0"))
        assert match.term == 1

    def test_order_55_two_year(self):
        match = find_guideline(date(2024, 8, 1), 2)
        assert match.order.order_number == 55
        assert match.rule == SplitRule(Decimal("2.75"), Decimal("3.2"))

    @pytest.mark.parametrize("day, expected", [
        (date(2023, 1, 1), 54),
        (date(2022, 1, 1), 53),
        (date(2021, 1, 1), 52),
        (date(2015, 10, 1), 47),
        (date(2025, 9, 30), 56),
    ])
    def test_known_dates(self, day, expected):
        assert find_guideline(day, 1).order.order_number == expected

    def test_accepts_datetime(self):
        match = find_guideline(datetime(2024, 8, 1, 17, 45), 1)
        assert match.order.order_number == 55

    @pytest.mark.parametrize("day", [date(2030, 1, 1), date(2040, 6, 15), date(2015, 9, 30)])
    def test_outside_table_is_none(self, day):
        assert find_guideline(day, 1) is None
        assert find_guideline(day, 2) is None

    @pytest.mark.parametrize("term", [0, 3, None])
    def test_invalid_term(self, term):
        with pytest.raises(ValueError, match="1 or 2"):
            find_guideline(date(2024, 8, 1), term)


class TestCoverage:
    """Every date inside an order's range resolves to that order."""

    @pytest.mark.parametrize("order", RGB_ORDERS, ids=lambda o: f"order_{o.order_number}")
    def test_boundaries_and_middle(self, order):
        middle = order.effective_from + (order.effective_to - order.effective_from) / 2
        for day in (order.effective_from, middle, order.effective_to):
            for term in (1, 2):
                match = find_guideline(day, term)
                assert match.order == order
                assert match.rule == order.rule_for(term)

    @pytest.mark.parametrize("index", range(len(RGB_ORDERS)))
    def test_neighbouring_days(self, index):
        order = RGB_ORDERS[index]
        before = find_guideline(order.effective_from - timedelta(days=1), 1)
        after = find_guideline(order.effective_to + timedelta(days=1), 1)

        if index == 0:
            assert before is None
        else:
            assert before.order == RGB_ORDERS[index - 1]

        if index == len(RGB_ORDERS) - 1:
            assert after is None
        else:
            assert after.order == RGB_ORDERS[index + 1]

    def test_every_day_resolves_to_exactly_one_order(self):
        first, last = RGB_ORDERS[0].effective_from, RGB_ORDERS[-1].effective_to
        day = first
        while day <= last:
            covering = [o for o in RGB_ORDERS if o.covers(day)]
            assert len(covering) == 1
            assert find_guideline(day, 1).order == covering[0]
            day += timedelta(days=1)


class TestOverlappingTable:
    """A table that was never validated may overlap; the first entry wins."""

    def test_first_match_in_table_order(self):
        first = RGBOrder(1, date(2020, 1, 1), date(2020, 12, 31), FlatRule(Decimal("1")), FlatRule(Decimal("2")))
        second = RGBOrder(2, date(2020, 6, 1), date(2021, 5, 31), FlatRule(Decimal("5")), FlatRule(Decimal("6")))

        assert find_guideline(date(2020, 7, 1), 1, [first, second]).order.order_number == 1
        assert find_guideline(date(2020, 7, 1), 1, [second, first]).order.order_number == 2
        assert find_guideline(date(2021, 3, 1), 2, [first, second]).rule == FlatRule(Decimal("6"))

    def test_empty_table(self):
        assert find_guideline(date(2024, 8, 1), 1, []) is None
