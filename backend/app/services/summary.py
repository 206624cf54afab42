"""
Plain-text renewal summary and printable document title.

The summary is what a tenant or managing agent pastes into an email: both
lease options, what the tenant pays under a preferential rent, and the RGB
rates behind the figures.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from app.rent_engine.calculator import CalculationResult, RenewalOptions
from app.services.formatting import (
    format_currency,
    format_lease_date,
    format_numeric_date,
    format_percent,
)

DISCLAIMER = "NYC rent-stabilized apartments only. Not legal advice. Confirm with HCR/RGB."


def _one_year_details(result: CalculationResult) -> str:
    steps = result.increase_steps
    if len(steps) == 1:
        return f"{format_percent(steps[0].percent)} → {format_currency(result.final_legal_rent)}"
    return (
        f"{format_percent(steps[0].percent)} + {format_percent(steps[1].percent)} "
        f"→ {format_currency(result.final_legal_rent)}"
    )


def _two_year_details(result: CalculationResult) -> str:
    steps = result.increase_steps
    if len(steps) == 1:
        return f"{format_percent(steps[0].percent)} → {format_currency(result.final_legal_rent)}"
    return " | ".join(
        f"{step.period_label}: {format_percent(step.percent)} → {format_currency(step.new_rent)}"
        for step in steps
    )


def _tenant_pays_line(result: CalculationResult) -> str:
    if result.preferential_outcome is None:
        return ""
    return f"\n• Tenant Pays: {format_currency(result.preferential_outcome.final_tenant_pay)}"


def build_renewal_summary(
    options: RenewalOptions,
    lease_start: date,
    current_rent: Decimal,
    preferential_rent: Optional[Decimal] = None,
    address: Optional[str] = None,
    unit: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render both renewal options as a copyable text block."""
    generated_at = generated_at or datetime.now()

    lines = ["NYC RENT STABILIZED RENEWAL CALCULATION", f"RGB Order #{options.order_number}"]
    if address:
        lines.append(f"PROPERTY: {address}")
    if unit:
        lines.append(f"UNIT: {unit}")

    current = f"CURRENT RENT: {format_currency(current_rent)}"
    if preferential_rent is not None:
        current += f" (Tenant Pays: {format_currency(preferential_rent)})"

    lines += [
        "",
        current,
        f"LEASE START: {format_lease_date(lease_start)}",
        "",
        "1-YEAR LEASE:",
        f"• Legal Rent: {_one_year_details(options.one_year)}{_tenant_pays_line(options.one_year)}",
        "",
        "2-YEAR LEASE:",
        f"• Legal Rent: {_two_year_details(options.two_year)}{_tenant_pays_line(options.two_year)}",
        "",
        "APPLIED RATES:",
        f"• 1-Year: {options.one_year.rule.rates_label()}",
        f"• 2-Year: {options.two_year.rule.rates_label()}",
        "",
        f"Calculated: {format_numeric_date(generated_at.date())} {generated_at.strftime('%I:%M %p')}",
        DISCLAIMER,
    ]
    return "\n".join(lines)


def build_document_title(
    options: RenewalOptions,
    address: Optional[str] = None,
    unit: Optional[str] = None,
    on: Optional[date] = None,
) -> str:
    """File-friendly title, e.g. ``NYC-Rent-Calculation-08-01-2024-120-Broadway-4B-RGB55``."""
    on = on or date.today()
    parts = [f"NYC-Rent-Calculation-{format_numeric_date(on, sep='-')}"]
    if address:
        street = re.sub(r"\s", "-", address.split(",")[0])
        parts.append(re.sub(r"[^a-zA-Z0-9-]", "", street))
    if unit:
        parts.append(re.sub(r"\s", "", unit))
    parts.append(f"RGB{options.order_number}")
    return "-".join(parts)
