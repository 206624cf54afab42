"""Tests for the RGB order table and its loader."""

from __future__ import annotations

import json
from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.rent_engine.rgb_orders import (
    RGB_ORDERS,
    RGB_ORDERS_DATA,
    coverage_window,
    get_order,
    load_orders,
    load_orders_file,
)
from app.rent_engine.rules import FlatRule, GuidelineTableError, SplitByMonthRule, SplitRule


def _entry(number, start, end, one_year=None, two_year=None):
    return {
        "order": number,
        "effective_from": start,
        "effective_to": end,
        "one_year": one_year or {"type": "flat", "pct": 1.0},
        "two_year": two_year or {"type": "flat", "pct": 2.0},
    }


class TestEmbeddedTable:

    def test_orders_47_through_56(self):
        assert [o.order_number for o in RGB_ORDERS] == list(range(47, 57))

    def test_ranges_are_contiguous(self):
        for prev, nxt in zip(RGB_ORDERS, RGB_ORDERS[1:]):
            assert nxt.effective_from == prev.effective_to + timedelta(days=1)

    def test_each_order_runs_october_to_september(self):
        for order in RGB_ORDERS:
            assert (order.effective_from.month, order.effective_from.day) == (10, 1)
            assert (order.effective_to.month, order.effective_to.day) == (9, 30)
            assert order.effective_to.year == order.effective_from.year + 1

    def test_coverage_window(self):
        assert coverage_window() == (date(2015, 10, 1), date(2025, 9, 30))

    def test_order_52_freeze(self):
        order = get_order(52)
        assert order.one_year == FlatRule(Decimal("0"))
        assert order.two_year == SplitRule(Decimal("0"), Decimal("1"))

    def test_order_53_split_by_month(self):
        order = get_order(53)
        assert order.one_year == SplitByMonthRule(6, Decimal("0"), Decimal("1.5"))
        assert order.two_year == FlatRule(Decimal("2.5"))

    def test_order_55_split_two_year(self):
        order = get_order(55)
        assert order.one_year == FlatRule(Decimal("3"))
        assert order.two_year == SplitRule(Decimal("2.75"), Decimal("3.2"))

    def test_unknown_order(self):
        assert get_order(12) is None

    def test_rule_for_term(self):
        order = get_order(54)
        assert order.rule_for(1) == FlatRule(Decimal("3.25"))
        assert order.rule_for(2) == FlatRule(Decimal("5"))
        with pytest.raises(ValueError):
            order.rule_for(3)

    def test_to_dict_matches_source_data(self):
        assert [o.to_dict() for o in RGB_ORDERS] == RGB_ORDERS_DATA

    def test_orders_are_immutable(self):
        with pytest.raises(AttributeError):
            RGB_ORDERS[0].order_number = 99


class TestLoadOrders:

    def test_sorts_by_effective_from(self):
        orders = load_orders([
            _entry(2, "2021-01-01", "2021-12-31"),
            _entry(1, "2020-01-01", "2020-12-31"),
        ])
        assert [o.order_number for o in orders] == [1, 2]

    def test_overlap_rejected(self):
        with pytest.raises(GuidelineTableError, match="overlap"):
            load_orders([
                _entry(1, "2020-01-01", "2020-12-31"),
                _entry(2, "2020-12-01", "2021-11-30"),
            ])

    def test_gap_rejected(self):
        with pytest.raises(GuidelineTableError, match="Gap"):
            load_orders([
                _entry(1, "2020-01-01", "2020-12-31"),
                _entry(2, "2021-02-01", "2022-01-31"),
            ])

    def test_inverted_range_rejected(self):
        with pytest.raises(GuidelineTableError, match="precedes"):
            load_orders([_entry(1, "2020-12-31", "2020-01-01")])

    def test_duplicate_order_number_rejected(self):
        with pytest.raises(GuidelineTableError, match="Duplicate"):
            load_orders([
                _entry(1, "2020-01-01", "2020-12-31"),
                _entry(1, "2021-01-01", "2021-12-31"),
            ])

    def test_empty_table_rejected(self):
        with pytest.raises(GuidelineTableError, match="empty"):
            load_orders([])

    def test_bad_date_rejected(self):
        with pytest.raises(GuidelineTableError, match="ISO date"):
            load_orders([_entry(1, "10/01/2020", "2021-09-30")])

    @pytest.mark.parametrize("number", [0, -3, "55", None])
    def test_bad_order_number_rejected(self, number):
        with pytest.raises(GuidelineTableError, match="positive integer"):
            load_orders([_entry(number, "2020-01-01", "2020-12-31")])

    def test_bad_rule_names_the_order(self):
        with pytest.raises(GuidelineTableError, match="Order 7"):
            load_orders([_entry(7, "2020-01-01", "2020-12-31", one_year={"type": "bogus"})])

    def test_single_day_order(self):
        orders = load_orders([_entry(1, "2020-01-01", "2020-01-01")])
        assert orders[0].covers(date(2020, 1, 1))

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps([
            _entry(60, "2026-10-01", "2027-09-30"),
        ]))
        orders = load_orders_file(str(path))
        assert len(orders) == 1
        assert orders[0].order_number == 60

    def test_load_from_file_requires_list(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps({"order": 1}))
        with pytest.raises(GuidelineTableError, match="JSON list"):
            load_orders_file(str(path))

    def test_load_from_file_rejects_invalid_json(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text('[{"order": 57, "effective_from": ')
        with pytest.raises(GuidelineTableError, match="invalid JSON"):
            load_orders_file(str(path))
