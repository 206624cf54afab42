from __future__ import annotations

from app.models.schemas import (
    CalculationRequest,
    CalculationResponse,
    RenewalOptionsRequest,
    RenewalOptionsResponse,
)

__all__ = [
    "CalculationRequest",
    "CalculationResponse",
    "RenewalOptionsRequest",
    "RenewalOptionsResponse",
]
