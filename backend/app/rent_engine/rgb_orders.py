"""
NYC Rent Guidelines Board (RGB) orders for rent-stabilized lease renewals.

Each order covers leases commencing October 1 through September 30 of the
following year and sets one rule for 1-year renewals and one for 2-year
renewals.  See ``app.rent_engine.rules`` for the rule shapes.

Coverage: Order #47 (Oct 1, 2015) through Order #56 (Sep 30, 2025).

Sources:
  - NYC Rent Guidelines Board, Apartment Orders #47-#56
  - Order #52: 1-year freeze; 2-year 0% year one, 1% year two
  - Order #53: 1-year 0% for the first six months, 1.5% thereafter
  - Order #55: 2-year 2.75% year one, 3.2% on the year one rent in year two

The table is parsed once at import into a tuple of frozen ``RGBOrder``
records.  Setting ``RGB_ORDERS_FILE`` points the loader at a JSON file in the
same format instead.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from app.config import settings
from app.rent_engine.rules import GuidelineTableError, IncreaseRule, parse_rule

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────
# APARTMENT ORDERS #47-#56
# ──────────────────────────────────────────────────────────────────

RGB_ORDERS_DATA = [
    {
        "order": 47,
        "effective_from": "2015-10-01",
        "effective_to": "2016-09-30",
        "one_year": {"type": "flat", "pct": 0.0},
        "two_year": {"type": "flat", "pct": 2.0},
    },
    {
        "order": 48,
        "effective_from": "2016-10-01",
        "effective_to": "2017-09-30",
        "one_year": {"type": "flat", "pct": 0.0},
        "two_year": {"type": "flat", "pct": 2.0},
    },
    {
        "order": 49,
        "effective_from": "2017-10-01",
        "effective_to": "2018-09-30",
        "one_year": {"type": "flat", "pct": 1.25},
        "two_year": {"type": "flat", "pct": 2.0},
    },
    {
        "order": 50,
        "effective_from": "2018-10-01",
        "effective_to": "2019-09-30",
        "one_year": {"type": "flat", "pct": 1.5},
        "two_year": {"type": "flat", "pct": 2.5},
    },
    {
        "order": 51,
        "effective_from": "2019-10-01",
        "effective_to": "2020-09-30",
        "one_year": {"type": "flat", "pct": 1.5},
        "two_year": {"type": "flat", "pct": 2.5},
    },
    {
        "order": 52,
        "effective_from": "2020-10-01",
        "effective_to": "2021-09-30",
        "one_year": {"type": "flat", "pct": 0.0},
        "two_year": {"type": "split", "year1_pct": 0.0, "year2_pct_on_year1_rent": 1.0},
    },
    {
        "order": 53,
        "effective_from": "2021-10-01",
        "effective_to": "2022-09-30",
        "one_year": {
            "type": "split_by_month",
            "first_months": 6,
            "first_pct": 0.0,
            "remaining_months_pct": 1.5,
        },
        "two_year": {"type": "flat", "pct": 2.5},
    },
    {
        "order": 54,
        "effective_from": "2022-10-01",
        "effective_to": "2023-09-30",
        "one_year": {"type": "flat", "pct": 3.25},
        "two_year": {"type": "flat", "pct": 5.0},
    },
    {
        "order": 55,
        "effective_from": "2023-10-01",
        "effective_to": "2024-09-30",
        "one_year": {"type": "flat", "pct": 3.0},
        "two_year": {"type": "split", "year1_pct": 2.75, "year2_pct_on_year1_rent": 3.2},
    },
    {
        "order": 56,
        "effective_from": "2024-10-01",
        "effective_to": "2025-09-30",
        "one_year": {"type": "flat", "pct": 2.75},
        "two_year": {"type": "flat", "pct": 5.25},
    },
]


@dataclass(frozen=True)
class RGBOrder:
    """One published guideline order."""
    order_number: int
    effective_from: date
    effective_to: date
    one_year: IncreaseRule
    two_year: IncreaseRule

    def covers(self, day: date) -> bool:
        return self.effective_from <= day <= self.effective_to

    def rule_for(self, term: int) -> IncreaseRule:
        if term == 1:
            return self.one_year
        if term == 2:
            return self.two_year
        raise ValueError(f"Lease term must be 1 or 2 years, got {term!r}")

    def to_dict(self) -> dict:
        return {
            "order": self.order_number,
            "effective_from": self.effective_from.isoformat(),
            "effective_to": self.effective_to.isoformat(),
            "one_year": self.one_year.to_dict(),
            "two_year": self.two_year.to_dict(),
        }


# ──────────────────────────────────────────────────────────────────
# LOADING
# ──────────────────────────────────────────────────────────────────

def _parse_date(entry: dict, key: str) -> date:
    value = entry.get(key)
    if not isinstance(value, str):
        raise GuidelineTableError(f"Order {entry.get('order')!r}: '{key}' must be an ISO date string")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise GuidelineTableError(
            f"Order {entry.get('order')!r}: '{key}' is not an ISO date: {value!r}"
        ) from None


def parse_order(entry: dict) -> RGBOrder:
    """Build one ``RGBOrder`` from its table dict."""
    if not isinstance(entry, dict):
        raise GuidelineTableError(f"Order entry must be a mapping, got {type(entry).__name__}")

    number = entry.get("order")
    if not isinstance(number, int) or isinstance(number, bool) or number <= 0:
        raise GuidelineTableError(f"Order number must be a positive integer, got {number!r}")

    effective_from = _parse_date(entry, "effective_from")
    effective_to = _parse_date(entry, "effective_to")
    if effective_to < effective_from:
        raise GuidelineTableError(
            f"Order {number}: effective_to {effective_to} precedes effective_from {effective_from}"
        )

    try:
        one_year = parse_rule(entry.get("one_year"))
        two_year = parse_rule(entry.get("two_year"))
    except GuidelineTableError as e:
        raise GuidelineTableError(f"Order {number}: {e}") from None

    return RGBOrder(
        order_number=number,
        effective_from=effective_from,
        effective_to=effective_to,
        one_year=one_year,
        two_year=two_year,
    )


def load_orders(data: Iterable[dict]) -> tuple[RGBOrder, ...]:
    """Parse and validate an order table.

    Orders are sorted by ``effective_from``.  Ranges must be contiguous:
    each order starts the day after the previous one ends.

    Raises:
        GuidelineTableError: malformed entry, duplicate order number,
            overlapping ranges or a gap between consecutive orders.
    """
    orders = sorted((parse_order(entry) for entry in data), key=lambda o: o.effective_from)
    if not orders:
        raise GuidelineTableError("RGB order table is empty")

    seen: set[int] = set()
    for order in orders:
        if order.order_number in seen:
            raise GuidelineTableError(f"Duplicate order number {order.order_number}")
        seen.add(order.order_number)

    for prev, nxt in zip(orders, orders[1:]):
        if nxt.effective_from <= prev.effective_to:
            raise GuidelineTableError(
                f"Orders {prev.order_number} and {nxt.order_number} overlap "
                f"({prev.effective_to} >= {nxt.effective_from})"
            )
        if nxt.effective_from != prev.effective_to + timedelta(days=1):
            raise GuidelineTableError(
                f"Gap between order {prev.order_number} (ends {prev.effective_to}) "
                f"and order {nxt.order_number} (starts {nxt.effective_from})"
            )

    return tuple(orders)


def load_orders_file(path: str) -> tuple[RGBOrder, ...]:
    """Load an order table from a JSON file in the embedded table format."""
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise GuidelineTableError(f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise GuidelineTableError(f"{path}: expected a JSON list of orders")
    return load_orders(data)


def _load_configured_orders() -> tuple[RGBOrder, ...]:
    if settings.rgb_orders_file:
        orders = load_orders_file(settings.rgb_orders_file)
        source = settings.rgb_orders_file
    else:
        orders = load_orders(RGB_ORDERS_DATA)
        source = "embedded table"
    logger.info(
        "Loaded %d RGB orders from %s (#%d-#%d, %s to %s)",
        len(orders), source,
        orders[0].order_number, orders[-1].order_number,
        orders[0].effective_from, orders[-1].effective_to,
    )
    return orders


RGB_ORDERS: tuple[RGBOrder, ...] = _load_configured_orders()


def get_orders() -> tuple[RGBOrder, ...]:
    return RGB_ORDERS


def get_order(order_number: int) -> Optional[RGBOrder]:
    for order in RGB_ORDERS:
        if order.order_number == order_number:
            return order
    return None


def coverage_window(orders: Optional[tuple[RGBOrder, ...]] = None) -> tuple[date, date]:
    """First and last lease-start dates any order covers."""
    orders = orders or RGB_ORDERS
    return orders[0].effective_from, orders[-1].effective_to
