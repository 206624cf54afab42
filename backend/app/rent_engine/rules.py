"""
RGB increase rules.

Each guideline order publishes one rule for 1-year renewals and one for
2-year renewals.  A rule is one of three shapes:

  - flat:            one percentage over the whole term
  - split:           year 1 percentage, then a year 2 percentage applied
                     to the (rounded) year 1 rent
  - split_by_month:  within a 1-year lease, the first N months at one
                     percentage and the remaining months at another, both
                     applied to the original rent

Table format (one dict per rule)::

    {"type": "flat", "pct": 3.0}
    {"type": "split", "year1_pct": 2.75, "year2_pct_on_year1_rent": 3.2}
    {"type": "split_by_month", "first_months": 6, "first_pct": 0.0,
     "remaining_months_pct": 1.5}
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from app.rent_engine.money import to_decimal

MONTHS_PER_YEAR = 12


class GuidelineTableError(ValueError):
    """Raised when RGB order data is malformed.  Surfaces at load time."""


def pct_text(pct: Decimal) -> str:
    """Render a percentage the way the orders print it: 3 -> '3', 2.75 -> '2.75'."""
    return f"{pct.normalize():f}"


@dataclass(frozen=True)
class FlatRule:
    pct: Decimal

    type = "flat"

    def describe(self) -> str:
        return f"{pct_text(self.pct)}% increase"

    def rates_label(self) -> str:
        return f"{pct_text(self.pct)}%"

    def to_dict(self) -> dict:
        return {"type": self.type, "pct": float(self.pct)}


@dataclass(frozen=True)
class SplitRule:
    year1_pct: Decimal
    year2_pct_on_year1_rent: Decimal

    type = "split"

    def describe(self) -> str:
        return (
            f"Year 1: {pct_text(self.year1_pct)}%, "
            f"Year 2: {pct_text(self.year2_pct_on_year1_rent)}% on Year 1 rent"
        )

    def rates_label(self) -> str:
        return f"{pct_text(self.year1_pct)}% / {pct_text(self.year2_pct_on_year1_rent)}%"

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "year1_pct": float(self.year1_pct),
            "year2_pct_on_year1_rent": float(self.year2_pct_on_year1_rent),
        }


@dataclass(frozen=True)
class SplitByMonthRule:
    first_months: int
    first_pct: Decimal
    remaining_months_pct: Decimal

    type = "split_by_month"

    @property
    def first_period_label(self) -> str:
        return f"Months 1-{self.first_months}"

    @property
    def remaining_period_label(self) -> str:
        return f"Months {self.first_months + 1}-{MONTHS_PER_YEAR}"

    def describe(self) -> str:
        return (
            f"First {self.first_months} months: {pct_text(self.first_pct)}%, "
            f"Remaining months: {pct_text(self.remaining_months_pct)}%"
        )

    def rates_label(self) -> str:
        return f"{pct_text(self.first_pct)}% / {pct_text(self.remaining_months_pct)}%"

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "first_months": self.first_months,
            "first_pct": float(self.first_pct),
            "remaining_months_pct": float(self.remaining_months_pct),
        }


IncreaseRule = Union[FlatRule, SplitRule, SplitByMonthRule]


# ──────────────────────────────────────────────────────────────────
# PARSING
# ──────────────────────────────────────────────────────────────────

def _pct(data: dict, key: str) -> Decimal:
    if key not in data:
        raise GuidelineTableError(f"{data.get('type')} rule is missing '{key}'")
    value = data[key]
    if isinstance(value, bool):
        raise GuidelineTableError(f"'{key}' must be a number, got {value!r}")
    try:
        pct = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise GuidelineTableError(f"'{key}' must be a number, got {value!r}") from None
    if not pct.is_finite():
        raise GuidelineTableError(f"'{key}' must be finite, got {value!r}")
    return pct


def parse_rule(data: dict) -> IncreaseRule:
    """Build a rule from its table dict.

    Raises:
        GuidelineTableError: unknown ``type``, missing field, or a
            ``first_months`` outside 1-11.
    """
    if not isinstance(data, dict):
        raise GuidelineTableError(f"Rule must be a mapping, got {type(data).__name__}")

    rule_type = data.get("type")
    if rule_type == "flat":
        return FlatRule(pct=_pct(data, "pct"))

    if rule_type == "split":
        return SplitRule(
            year1_pct=_pct(data, "year1_pct"),
            year2_pct_on_year1_rent=_pct(data, "year2_pct_on_year1_rent"),
        )

    if rule_type == "split_by_month":
        first_months = data.get("first_months")
        if isinstance(first_months, float) and first_months.is_integer():
            first_months = int(first_months)
        if (
            not isinstance(first_months, int)
            or isinstance(first_months, bool)
            or not 1 <= first_months < MONTHS_PER_YEAR
        ):
            raise GuidelineTableError(
                f"split_by_month 'first_months' must be 1-{MONTHS_PER_YEAR - 1}, "
                f"got {first_months!r}"
            )
        return SplitByMonthRule(
            first_months=first_months,
            first_pct=_pct(data, "first_pct"),
            remaining_months_pct=_pct(data, "remaining_months_pct"),
        )

    raise GuidelineTableError(f"Unknown rule type: {rule_type!r}")
