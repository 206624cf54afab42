from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query

from app.models.schemas import (
    CalculationRequest,
    CalculationResponse,
    GuidelineResponse,
    RenewalOptionsRequest,
    RenewalOptionsResponse,
    RGBOrderSchema,
)
from app.rent_engine.calculator import calculate_renewal_options, calculate_rent_increase
from app.rent_engine.guidelines import find_guideline
from app.rent_engine.money import to_decimal
from app.rent_engine.rgb_orders import get_orders
from app.services.summary import build_document_title, build_renewal_summary

router = APIRouter(prefix="/api")


def _no_guideline(lease_start: date) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=f"No applicable RGB guideline for lease start date {lease_start.isoformat()}",
    )


@router.post("/calculate", response_model=CalculationResponse)
async def calculate(request: CalculationRequest):
    """Calculate the renewal rent for one lease term."""
    result = calculate_rent_increase(
        request.lease_start_date,
        request.term,
        request.current_rent,
        request.preferential_rent,
    )
    if result is None:
        raise _no_guideline(request.lease_start_date)
    return CalculationResponse(**result.to_dict())


@router.post("/renewal-options", response_model=RenewalOptionsResponse)
async def renewal_options(request: RenewalOptionsRequest):
    """Calculate both the 1-year and 2-year offers plus a copyable summary."""
    options = calculate_renewal_options(
        request.lease_start_date, request.current_rent, request.preferential_rent,
    )
    if options is None:
        raise _no_guideline(request.lease_start_date)

    preferential = (
        to_decimal(request.preferential_rent) if request.preferential_rent is not None else None
    )
    summary = build_renewal_summary(
        options,
        lease_start=request.lease_start_date,
        current_rent=to_decimal(request.current_rent),
        preferential_rent=preferential,
        address=request.address,
        unit=request.unit,
    )
    return RenewalOptionsResponse(
        order=options.order_number,
        effective_from=options.order.effective_from,
        effective_to=options.order.effective_to,
        one_year=CalculationResponse(**options.one_year.to_dict()),
        two_year=CalculationResponse(**options.two_year.to_dict()),
        summary_text=summary,
        document_title=build_document_title(options, address=request.address, unit=request.unit),
    )


@router.get("/guideline", response_model=GuidelineResponse)
async def guideline(
    lease_start: date = Query(..., alias="date", description="Lease start date (YYYY-MM-DD)"),
    term: int = Query(1, ge=1, le=2, description="Lease term in years"),
):
    """Look up the RGB order and rule for a lease start date."""
    match = find_guideline(lease_start, term)
    if match is None:
        raise _no_guideline(lease_start)
    return GuidelineResponse(
        order=RGBOrderSchema(**match.order.to_dict()),
        term=term,
        rule=match.rule.to_dict(),
        description=match.rule.describe(),
    )


@router.get("/orders", response_model=list[RGBOrderSchema])
async def list_orders():
    """Return the full RGB order table."""
    return [RGBOrderSchema(**order.to_dict()) for order in get_orders()]
