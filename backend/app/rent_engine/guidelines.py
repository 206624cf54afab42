"""Guideline lookup: which RGB order and rule apply to a lease start date."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from app.rent_engine.rgb_orders import RGBOrder, get_orders
from app.rent_engine.rules import IncreaseRule

logger = logging.getLogger(__name__)

VALID_TERMS = (1, 2)


@dataclass(frozen=True)
class GuidelineMatch:
    order: RGBOrder
    rule: IncreaseRule
    term: int


def find_guideline(
    lease_start: date,
    term: int,
    orders: Optional[Sequence[RGBOrder]] = None,
) -> Optional[GuidelineMatch]:
    """Find the order whose effective range contains ``lease_start``.

    Ranges are inclusive on both ends.  Orders are scanned in sequence and
    the first match wins, so an overlapping table resolves to the earlier
    entry.  Returns None when no order covers the date; that is an expected
    outcome for dates outside the table, not an error.

    Raises:
        ValueError: ``term`` is not 1 or 2.
    """
    if term not in VALID_TERMS:
        raise ValueError(f"Lease term must be 1 or 2 years, got {term!r}")
    if isinstance(lease_start, datetime):
        lease_start = lease_start.date()
    if orders is None:
        orders = get_orders()

    for order in orders:
        if order.covers(lease_start):
            return GuidelineMatch(order=order, rule=order.rule_for(term), term=term)

    logger.info("No RGB order covers lease start %s", lease_start)
    return None
