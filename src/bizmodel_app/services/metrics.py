from __future__ import annotations

import math
from typing import Iterable, Sequence

from ..models.common import UNBOUNDED, MetricValue, finite
from ..models.inputs import ModelInputs
from ..models.results import SummaryMetrics, YearlySummary


def excel_round(value: float, decimals: int = 0) -> float:
    """Spreadsheet ROUND: half away from zero."""
    factor = 10 ** decimals
    return math.copysign(math.floor(abs(value) * factor + 0.5) / factor, value)


def safe_ratio(numerator: float, denominator: float) -> MetricValue:
    if denominator == 0:
        return UNBOUNDED
    return finite(numerator / denominator)


def cagr(monthly_rate: float) -> float:
    """Annual compound growth implied by a monthly rate: (1 + r)^12 - 1."""
    return (1 + monthly_rate) ** 12 - 1


def average_lifespan_months(monthly_churn: float) -> MetricValue:
    return safe_ratio(1.0, monthly_churn)


def ltv(monthly_revenue_per_customer: float, lifespan_months: MetricValue, gross_margin: float) -> MetricValue:
    """Customer lifetime value: ARPA x gross margin x lifespan."""
    if lifespan_months.is_unbounded:
        return UNBOUNDED
    return finite(monthly_revenue_per_customer * gross_margin * lifespan_months.value)


def cac_payback_months(monthly_revenue_per_customer: float, gross_margin: float, cac: MetricValue) -> MetricValue:
    """Months of gross-margin contribution needed to recoup one CAC."""
    if cac.is_unbounded:
        return UNBOUNDED
    return safe_ratio(cac.value, monthly_revenue_per_customer * gross_margin)


def ltv_to_cac_ratio(ltv_value: MetricValue, cac: MetricValue) -> MetricValue:
    if ltv_value.is_unbounded:
        return UNBOUNDED
    if cac.is_unbounded:
        return finite(0.0)
    return safe_ratio(ltv_value.value, cac.value)


def gross_margin_from_cogs(cost_ratios: Iterable[float]) -> float:
    """1 - (cc fees + inference + delivery + inventory), floored at 0.

    Staffing, office, insurance and rent are operating expenses and are not
    part of COGS.
    """
    return max(0.0, 1 - sum(cost_ratios))


def cac_from_ad_spend(ad_spend: float, traffic_at_launch: float, conversion_rate: float) -> MetricValue:
    """Launch-month acquisition cost, held constant for the whole projection.

    Unbounded when launch traffic rounds to zero paid conversions, matching
    the whole-customer count the first monthly record reports.
    """
    expected_conversions = traffic_at_launch * conversion_rate
    if excel_round(expected_conversions) == 0:
        return UNBOUNDED
    return finite(ad_spend / expected_conversions)


def summarize(inputs: ModelInputs, arpu: float, yearly_summaries: Sequence[YearlySummary]) -> SummaryMetrics:
    gross_margin = gross_margin_from_cogs(inputs.cogs_ratios())
    cac = cac_from_ad_spend(inputs.monthly_ad_spend, inputs.starting_paid_traffic, inputs.conversion_rate)
    lifespan = average_lifespan_months(inputs.monthly_churn)
    ltv_value = ltv(arpu, lifespan, gross_margin)

    net_profits = [summary.net_profit for summary in yearly_summaries] + [0.0] * 3
    net_profit_fy1, net_profit_fy2, net_profit_fy3 = net_profits[:3]

    return SummaryMetrics(
        arpu=arpu,
        gross_margin=gross_margin,
        cac=cac,
        ltv=ltv_value,
        ltv_to_cac=ltv_to_cac_ratio(ltv_value, cac),
        cac_payback_months=cac_payback_months(arpu, gross_margin, cac),
        cagr=cagr(inputs.monthly_growth_rate),
        average_lifespan_months=lifespan,
        net_profit_fy1=net_profit_fy1,
        net_profit_fy2=net_profit_fy2,
        net_profit_fy3=net_profit_fy3,
        meets_minimum_success_criteria=net_profit_fy3 >= inputs.minimum_success_criteria,
    )
