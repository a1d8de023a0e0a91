from __future__ import annotations

from enum import Enum


class CostCategory(str, Enum):
    CC_FEES = "cc_fees"
    CAC = "cac"
    STAFFING = "staffing"
    OFFICE = "office"
    INSURANCE = "insurance"
    INVENTORY = "inventory"
    DELIVERY = "delivery"
    INFERENCE = "inference"
    RENT = "rent"


# Categories scaled by gross revenue, paired with the ModelInputs ratio field.
REVENUE_SCALED_COSTS = (
    (CostCategory.CC_FEES, "cc_processing_fees"),
    (CostCategory.STAFFING, "staffing_costs"),
    (CostCategory.OFFICE, "office_supplies"),
    (CostCategory.INSURANCE, "business_insurance"),
    (CostCategory.INVENTORY, "inventory_costs"),
    (CostCategory.DELIVERY, "delivery_costs"),
    (CostCategory.INFERENCE, "inference_costs"),
)
