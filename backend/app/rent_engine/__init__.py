from __future__ import annotations

from app.rent_engine.calculator import (
    RentIncreaseCalculator,
    calculate_rent_increase,
    calculate_renewal_options,
)
from app.rent_engine.guidelines import find_guideline

__all__ = [
    "RentIncreaseCalculator",
    "calculate_rent_increase",
    "calculate_renewal_options",
    "find_guideline",
]
