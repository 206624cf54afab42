from __future__ import annotations

from datetime import date
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

MAX_RENT = 1_000_000_000


# ──────────────────────────────────────────────────────────────────
# REQUESTS
# ──────────────────────────────────────────────────────────────────

class RenewalInputs(BaseModel):
    """Renewal inputs as entered on the form.

    Rents must be positive and a preferential rent cannot exceed the legal
    regulated rent.
    """
    lease_start_date: date
    current_rent: float = Field(
        gt=0, lt=MAX_RENT, allow_inf_nan=False, description="Current legal regulated rent",
    )
    preferential_rent: Optional[float] = Field(
        default=None, gt=0, lt=MAX_RENT, allow_inf_nan=False,
        description="Amount the tenant actually pays, if lower",
    )

    @model_validator(mode="after")
    def check_preferential_not_above_legal(self):
        if self.preferential_rent is not None and self.preferential_rent > self.current_rent:
            raise ValueError("Preferential rent cannot be higher than legal regulated rent")
        return self


class CalculationRequest(RenewalInputs):
    term: Literal[1, 2] = 1


class RenewalOptionsRequest(RenewalInputs):
    address: Optional[str] = None
    unit: Optional[str] = None


# ──────────────────────────────────────────────────────────────────
# RULES / ORDERS
# ──────────────────────────────────────────────────────────────────

class FlatRuleSchema(BaseModel):
    type: Literal["flat"]
    pct: float


class SplitRuleSchema(BaseModel):
    type: Literal["split"]
    year1_pct: float
    year2_pct_on_year1_rent: float


class SplitByMonthRuleSchema(BaseModel):
    type: Literal["split_by_month"]
    first_months: int
    first_pct: float
    remaining_months_pct: float


RuleSchema = Union[FlatRuleSchema, SplitRuleSchema, SplitByMonthRuleSchema]


class RGBOrderSchema(BaseModel):
    order: int
    effective_from: date
    effective_to: date
    one_year: RuleSchema = Field(discriminator="type")
    two_year: RuleSchema = Field(discriminator="type")


class GuidelineResponse(BaseModel):
    order: RGBOrderSchema
    term: int
    rule: RuleSchema = Field(discriminator="type")
    description: str


# ──────────────────────────────────────────────────────────────────
# RESULTS
# ──────────────────────────────────────────────────────────────────

class IncreaseStepSchema(BaseModel):
    period: str
    old_rent: float
    new_rent: float
    percent_increase: float
    dollar_increase: float


class MonthlyRentSchema(BaseModel):
    month: int
    period: str
    legal_rent: float
    tenant_pays: float


class PreferentialResultSchema(BaseModel):
    final_tenant_pay: float
    year1_tenant_pay: Optional[float] = None
    explanation: str = ""


class CalculationResponse(BaseModel):
    order: int
    term: int
    rule: RuleSchema = Field(discriminator="type")
    new_legal_rent: float
    increases: list[IncreaseStepSchema]
    monthly_breakdown: Optional[list[MonthlyRentSchema]] = None
    preferential_result: Optional[PreferentialResultSchema] = None
    applied_rule: str
    lease_end_date: date


class RenewalOptionsResponse(BaseModel):
    order: int
    effective_from: date
    effective_to: date
    one_year: CalculationResponse
    two_year: CalculationResponse
    summary_text: str
    document_title: str
