"""
Renewal rent calculator: takes a lease start date, term and current rent and
produces the new legal rent under the applicable RGB order.

Three rule shapes (see ``app.rent_engine.rules``):

  - flat:            new = base * (1 + pct)
  - split:           y1 = base * (1 + p1);  y2 = y1 * (1 + p2)
                     24-month schedule, months 13-24 at y2
  - split_by_month:  first = base * (1 + fp);  rest = base * (1 + rp)
                     both from the same base, 12-month schedule

Each figure is rounded to the cent before it is used again.

Preferential rent:
  - split:           compounded year over year exactly like the legal rent
  - flat and
    split_by_month:  carried over unchanged

Usage::

    from app.rent_engine.calculator import calculate_rent_increase
    result = calculate_rent_increase(date(2024, 8, 1), 2, Decimal("1759.79"))
    if result is None:
        ...  # no guideline covers that date
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from app.rent_engine.guidelines import GuidelineMatch, find_guideline
from app.rent_engine.money import Number, apply_increase, round2, to_decimal
from app.rent_engine.rgb_orders import RGBOrder
from app.rent_engine.rules import (
    MONTHS_PER_YEAR,
    FlatRule,
    IncreaseRule,
    SplitByMonthRule,
    SplitRule,
    pct_text,
)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────
# DATA CLASSES
# ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CalculationRequest:
    """Inputs for one renewal term.  Validated before they reach the engine:
    ``base_rent > 0`` and ``0 < preferential_rent <= base_rent``."""
    lease_start_date: date
    term: int
    base_rent: Decimal
    preferential_rent: Optional[Decimal] = None


@dataclass(frozen=True)
class IncreaseStep:
    period_label: str
    old_rent: Decimal
    new_rent: Decimal
    percent: Decimal

    @property
    def dollar_delta(self) -> Decimal:
        return self.new_rent - self.old_rent

    def to_dict(self) -> dict:
        return {
            "period": self.period_label,
            "old_rent": float(self.old_rent),
            "new_rent": float(self.new_rent),
            "percent_increase": float(self.percent),
            "dollar_increase": float(self.dollar_delta),
        }


@dataclass(frozen=True)
class MonthlyRent:
    month_index: int
    period_label: str
    legal_rent: Decimal
    tenant_pays: Decimal

    def to_dict(self) -> dict:
        return {
            "month": self.month_index,
            "period": self.period_label,
            "legal_rent": float(self.legal_rent),
            "tenant_pays": float(self.tenant_pays),
        }


@dataclass(frozen=True)
class PreferentialOutcome:
    final_tenant_pay: Decimal
    year1_tenant_pay: Optional[Decimal] = None
    explanation: str = ""

    def to_dict(self) -> dict:
        return {
            "final_tenant_pay": float(self.final_tenant_pay),
            "year1_tenant_pay": (
                float(self.year1_tenant_pay) if self.year1_tenant_pay is not None else None
            ),
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class CalculationResult:
    order_number: int
    term: int
    rule: IncreaseRule
    final_legal_rent: Decimal
    increase_steps: tuple[IncreaseStep, ...]
    lease_end_date: date
    applied_rule: str
    monthly_breakdown: Optional[tuple[MonthlyRent, ...]] = None
    preferential_outcome: Optional[PreferentialOutcome] = None

    def to_dict(self) -> dict:
        return {
            "order": self.order_number,
            "term": self.term,
            "rule": self.rule.to_dict(),
            "new_legal_rent": float(self.final_legal_rent),
            "increases": [s.to_dict() for s in self.increase_steps],
            "monthly_breakdown": (
                [m.to_dict() for m in self.monthly_breakdown]
                if self.monthly_breakdown is not None else None
            ),
            "preferential_result": (
                self.preferential_outcome.to_dict()
                if self.preferential_outcome is not None else None
            ),
            "applied_rule": self.applied_rule,
            "lease_end_date": self.lease_end_date.isoformat(),
        }


@dataclass(frozen=True)
class RenewalOptions:
    """Both renewal offers for one lease start date, as a renewal form lists them."""
    order: RGBOrder
    one_year: CalculationResult
    two_year: CalculationResult

    @property
    def order_number(self) -> int:
        return self.order.order_number


# ──────────────────────────────────────────────────────────────────
# HELPERS
# ──────────────────────────────────────────────────────────────────

def lease_end_date(lease_start: date, term: int) -> date:
    """Last day of a ``term``-year lease: same calendar day ``term`` years on, minus one.

    A Feb 29 start has no anniversary in a non-leap year; it rolls to Mar 1,
    so the lease ends Feb 28.
    """
    if isinstance(lease_start, datetime):
        lease_start = lease_start.date()
    try:
        anniversary = lease_start.replace(year=lease_start.year + term)
    except ValueError:
        anniversary = date(lease_start.year + term, 3, 1)
    return anniversary - timedelta(days=1)


def _money_text(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def _schedule(
    periods: Sequence[tuple[str, int, Decimal, Decimal]],
) -> tuple[MonthlyRent, ...]:
    """Expand ``(label, months, legal_rent, tenant_pays)`` blocks into months."""
    months: list[MonthlyRent] = []
    for label, count, legal, tenant in periods:
        for _ in range(count):
            months.append(MonthlyRent(
                month_index=len(months) + 1,
                period_label=label,
                legal_rent=legal,
                tenant_pays=tenant,
            ))
    return tuple(months)


# ──────────────────────────────────────────────────────────────────
# CALCULATOR
# ──────────────────────────────────────────────────────────────────

class RentIncreaseCalculator:
    """Applies RGB orders to renewal requests.

    Holds only the order table it looks guidelines up in; every call is
    independent and returns fresh value objects.
    """

    def __init__(self, orders: Optional[Sequence[RGBOrder]] = None):
        self.orders = orders

    def find_guideline(self, lease_start: date, term: int) -> Optional[GuidelineMatch]:
        return find_guideline(lease_start, term, self.orders)

    def calculate(self, request: CalculationRequest) -> Optional[CalculationResult]:
        """Compute the renewal for one term, or None when no order covers the date."""
        match = self.find_guideline(request.lease_start_date, request.term)
        if match is None:
            return None
        return self._calculate_match(match, request)

    def _calculate_match(self, match: GuidelineMatch, request: CalculationRequest) -> CalculationResult:
        base = round2(request.base_rent)
        pref = round2(request.preferential_rent) if request.preferential_rent is not None else None
        rule = match.rule
        logger.debug(
            "Order #%d, %d-year term, %s rule: %s",
            match.order.order_number, request.term, rule.type, rule.describe(),
        )

        if isinstance(rule, FlatRule):
            return self._calculate_flat(match, rule, request, base, pref)
        if isinstance(rule, SplitRule):
            return self._calculate_split(match, rule, request, base, pref)
        if isinstance(rule, SplitByMonthRule):
            return self._calculate_split_by_month(match, rule, request, base, pref)
        raise TypeError(f"Unsupported increase rule: {rule!r}")

    def calculate_renewal_options(
        self,
        lease_start: date,
        base_rent: Number,
        preferential_rent: Optional[Number] = None,
    ) -> Optional[RenewalOptions]:
        """Compute both the 1-year and 2-year renewal offers."""
        base = to_decimal(base_rent)
        pref = to_decimal(preferential_rent) if preferential_rent is not None else None
        match = self.find_guideline(lease_start, 1)
        if match is None:
            return None
        order = match.order
        one_year = self._calculate_match(match, CalculationRequest(lease_start, 1, base, pref))
        two_year = self._calculate_match(
            GuidelineMatch(order, order.rule_for(2), 2),
            CalculationRequest(lease_start, 2, base, pref),
        )
        return RenewalOptions(order=order, one_year=one_year, two_year=two_year)

    # ── rule branches ──

    def _calculate_flat(
        self,
        match: GuidelineMatch,
        rule: FlatRule,
        request: CalculationRequest,
        base: Decimal,
        pref: Optional[Decimal],
    ) -> CalculationResult:
        new_rent = apply_increase(base, rule.pct)
        label = "Year 1" if request.term == 1 else f"Years 1-{request.term}"

        preferential = None
        if pref is not None:
            preferential = PreferentialOutcome(
                final_tenant_pay=pref,
                explanation=f"Preferential rent carried over unchanged at {_money_text(pref)}",
            )

        return CalculationResult(
            order_number=match.order.order_number,
            term=request.term,
            rule=rule,
            final_legal_rent=new_rent,
            increase_steps=(IncreaseStep(label, base, new_rent, rule.pct),),
            lease_end_date=lease_end_date(request.lease_start_date, request.term),
            applied_rule=f"Order #{match.order.order_number}, {rule.describe()}",
            preferential_outcome=preferential,
        )

    def _calculate_split(
        self,
        match: GuidelineMatch,
        rule: SplitRule,
        request: CalculationRequest,
        base: Decimal,
        pref: Optional[Decimal],
    ) -> CalculationResult:
        year1 = apply_increase(base, rule.year1_pct)
        year2 = apply_increase(year1, rule.year2_pct_on_year1_rent)

        preferential = None
        year1_tenant, year2_tenant = year1, year2
        if pref is not None:
            year1_tenant = apply_increase(pref, rule.year1_pct)
            year2_tenant = apply_increase(year1_tenant, rule.year2_pct_on_year1_rent)
            preferential = PreferentialOutcome(
                final_tenant_pay=year2_tenant,
                year1_tenant_pay=year1_tenant,
                explanation=(
                    f"Preferential rent increases by {pct_text(rule.year1_pct)}% in Year 1, "
                    f"then {pct_text(rule.year2_pct_on_year1_rent)}% in Year 2"
                ),
            )

        monthly = _schedule([
            ("Year 1", MONTHS_PER_YEAR, year1, year1_tenant),
            ("Year 2", MONTHS_PER_YEAR, year2, year2_tenant),
        ])

        return CalculationResult(
            order_number=match.order.order_number,
            term=request.term,
            rule=rule,
            final_legal_rent=year2,
            increase_steps=(
                IncreaseStep("Year 1", base, year1, rule.year1_pct),
                IncreaseStep("Year 2", year1, year2, rule.year2_pct_on_year1_rent),
            ),
            lease_end_date=lease_end_date(request.lease_start_date, request.term),
            applied_rule=f"Order #{match.order.order_number}, {rule.describe()}",
            monthly_breakdown=monthly,
            preferential_outcome=preferential,
        )

    def _calculate_split_by_month(
        self,
        match: GuidelineMatch,
        rule: SplitByMonthRule,
        request: CalculationRequest,
        base: Decimal,
        pref: Optional[Decimal],
    ) -> CalculationResult:
        first = apply_increase(base, rule.first_pct)
        remaining = apply_increase(base, rule.remaining_months_pct)
        remaining_months = MONTHS_PER_YEAR - rule.first_months

        # TODO: confirm with HCR whether preferential rent should follow the
        # month-block percentages; it is carried over unchanged for now.
        preferential = None
        first_tenant, remaining_tenant = first, remaining
        if pref is not None:
            first_tenant = remaining_tenant = pref
            preferential = PreferentialOutcome(
                final_tenant_pay=pref,
                explanation=f"Preferential rent carried over unchanged at {_money_text(pref)}",
            )

        monthly = _schedule([
            (rule.first_period_label, rule.first_months, first, first_tenant),
            (rule.remaining_period_label, remaining_months, remaining, remaining_tenant),
        ])

        return CalculationResult(
            order_number=match.order.order_number,
            term=request.term,
            rule=rule,
            final_legal_rent=remaining,
            increase_steps=(
                IncreaseStep(rule.first_period_label, base, first, rule.first_pct),
                IncreaseStep(rule.remaining_period_label, base, remaining, rule.remaining_months_pct),
            ),
            lease_end_date=lease_end_date(request.lease_start_date, request.term),
            applied_rule=f"Order #{match.order.order_number}, {rule.describe()}",
            monthly_breakdown=monthly,
            preferential_outcome=preferential,
        )


_default_calculator = RentIncreaseCalculator()


def calculate_rent_increase(
    lease_start: date,
    term: int,
    current_rent: Number,
    preferential_rent: Optional[Number] = None,
) -> Optional[CalculationResult]:
    """Module-level entry point over the loaded RGB order table."""
    return _default_calculator.calculate(CalculationRequest(
        lease_start_date=lease_start,
        term=term,
        base_rent=to_decimal(current_rent),
        preferential_rent=to_decimal(preferential_rent) if preferential_rent is not None else None,
    ))


def calculate_renewal_options(
    lease_start: date,
    current_rent: Number,
    preferential_rent: Optional[Number] = None,
) -> Optional[RenewalOptions]:
    return _default_calculator.calculate_renewal_options(lease_start, current_rent, preferential_rent)
