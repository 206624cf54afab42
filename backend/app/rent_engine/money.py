"""
Penny arithmetic for renewal figures.

Every dollar amount is a ``Decimal`` rounded to the cent, half-up, at each
step.  A rounded figure is what feeds the next step, so a year-2 rent is
compounded on the year-1 rent exactly as it appears on the renewal form.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a user- or table-supplied number to ``Decimal``.

    Floats go through ``str()`` so ``3.25`` becomes ``Decimal("3.25")``
    rather than its binary approximation.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(amount: Number) -> Decimal:
    """Round to the cent, half-up (37.0368 -> 37.04, 0.125 -> 0.13)."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def apply_increase(rent: Number, pct: Number) -> Decimal:
    """Return ``rent`` raised by ``pct`` percent, rounded to the cent."""
    rent = to_decimal(rent)
    return round2(rent * (1 + to_decimal(pct) / HUNDRED))
