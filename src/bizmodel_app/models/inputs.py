from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tiers import Tier


def _default_tiers() -> Tuple[Tier, ...]:
    return (Tier(id="standard", name="Standard", monthly_price=15.0, distribution=1.0),)


class ModelInputs(BaseModel):
    """Assumption set for one scenario run. Rates and cost ratios are fractions."""

    model_config = ConfigDict(frozen=True)

    minimum_success_criteria: float = Field(1_000_000.0, description="Target FY3 net profit")
    monthly_growth_rate: float = Field(0.02, ge=0, le=1)
    starting_paid_traffic: float = Field(2000.0, ge=0, description="Paid visitors in the launch month")
    organic_traffic: float = Field(0.0, ge=0, description="Constant monthly non-paid visitors")
    conversion_rate: float = Field(0.02, ge=0, le=1, description="Paid traffic to customer conversion")
    customer_referral_rate: float = Field(0.05, ge=0, lt=1)
    monthly_churn: float = Field(0.05, ge=0, le=1, description="1.0 models one-time purchases")
    monthly_ad_spend: float = Field(600.0, ge=0)
    rent: float = Field(0.0, ge=0, description="Fixed monthly overhead")

    cc_processing_fees: float = Field(0.025, ge=0, le=1)
    staffing_costs: float = Field(0.15, ge=0, le=1)
    office_supplies: float = Field(0.02, ge=0, le=1)
    business_insurance: float = Field(0.01, ge=0, le=1)
    inventory_costs: float = Field(0.0, ge=0, le=1)
    delivery_costs: float = Field(0.0, ge=0, le=1)
    inference_costs: float = Field(0.0, ge=0, le=1)

    pricing_tiers: Tuple[Tier, ...] = Field(default_factory=_default_tiers, min_length=1)
    start_date: Optional[date] = Field(default=None, description="Calendar date of month 1, if any")

    @field_validator("pricing_tiers")
    @classmethod
    def _unique_tier_ids(cls, tiers: Tuple[Tier, ...]) -> Tuple[Tier, ...]:
        ids = [tier.id for tier in tiers]
        if len(ids) != len(set(ids)):
            raise ValueError("pricing tier ids must be unique")
        return tiers

    def cogs_ratios(self) -> Tuple[float, float, float, float]:
        return (self.cc_processing_fees, self.inference_costs, self.delivery_costs, self.inventory_costs)

    def revenue_cost_ratios(self) -> Tuple[float, ...]:
        return (
            self.cc_processing_fees,
            self.staffing_costs,
            self.office_supplies,
            self.business_insurance,
            self.inventory_costs,
            self.delivery_costs,
            self.inference_costs,
        )
