from __future__ import annotations

from datetime import date
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .common import MetricValue, ValidationWarning
from .costs import CostCategory
from .inputs import ModelInputs


class CostBreakdown(BaseModel):
    """Per-category operating cost for one month; indexable by CostCategory."""

    model_config = ConfigDict(frozen=True)

    cc_fees: float
    cac: float
    staffing: float
    office: float
    insurance: float
    inventory: float
    delivery: float
    inference: float
    rent: float

    def __getitem__(self, category: CostCategory) -> float:
        return getattr(self, CostCategory(category).value)

    def items(self) -> Iterator[Tuple[CostCategory, float]]:
        return ((category, self[category]) for category in CostCategory)

    def total(self) -> float:
        return sum(value for _, value in self.items())


class MonthlyRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    year: int
    month_in_year: int
    month_name: str
    period_start: Optional[date] = None
    paid_traffic: float
    organic_traffic: float
    total_traffic: float
    paid_conversions: int
    referrals: float
    previous_retained: int
    churn_count: int
    retained_customers: int
    gross_revenue: float
    costs: CostBreakdown
    total_operating_cost: float
    net_profit: float
    net_profit_margin: float


class YearlySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    total_paid_traffic: float
    total_organic_traffic: float
    total_traffic: float
    total_conversions: int
    total_referrals: float
    total_churn: int
    end_retained: int
    gross_revenue: float
    total_costs: float
    net_profit: float
    net_profit_margin: float


class SummaryMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    arpu: float
    gross_margin: float
    cac: MetricValue
    ltv: MetricValue
    ltv_to_cac: MetricValue
    cac_payback_months: MetricValue
    cagr: float
    average_lifespan_months: MetricValue
    net_profit_fy1: float
    net_profit_fy2: float
    net_profit_fy3: float
    meets_minimum_success_criteria: bool


class ScenarioResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    inputs: ModelInputs
    monthly_records: Tuple[MonthlyRecord, ...]
    yearly_summaries: Tuple[YearlySummary, ...]
    summary_metrics: SummaryMetrics
    warnings: Tuple[ValidationWarning, ...] = ()
