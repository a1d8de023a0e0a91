from __future__ import annotations

from .models.inputs import ModelInputs
from .models.tiers import Tier


def build_default_inputs() -> ModelInputs:
    return ModelInputs()


def build_example_inputs() -> ModelInputs:
    tiers = (
        Tier(id="basic", name="Basic", monthly_price=29, distribution=0.6),
        Tier(id="pro", name="Pro", monthly_price=79, distribution=0.3),
        Tier(id="enterprise", name="Enterprise", monthly_price=199, distribution=0.1),
    )
    return ModelInputs(
        minimum_success_criteria=1_000_000,
        monthly_growth_rate=0.10,
        starting_paid_traffic=2000,
        organic_traffic=500,
        conversion_rate=0.02,
        customer_referral_rate=0.10,
        monthly_churn=0.035,
        monthly_ad_spend=1200,
        rent=500,
        cc_processing_fees=0.025,
        staffing_costs=0.15,
        office_supplies=0.02,
        business_insurance=0.01,
        inference_costs=0.05,
        pricing_tiers=tiers,
    )
