"""Industry benchmark thresholds and status evaluators for unit economics."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from ..models.common import MetricValue
from ..models.results import ScenarioResult


class BenchmarkStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"
    HIGH = "high"


LTV_CAC_POOR = 3.0
LTV_CAC_MEDIAN = 3.5
LTV_CAC_GOOD = 6.0

CAC_PAYBACK_EXCELLENT = 6.0
CAC_PAYBACK_GOOD = 12.0
CAC_PAYBACK_ACCEPTABLE = 18.0

GROSS_MARGIN_TARGET = 0.80
GROSS_MARGIN_MINIMUM = 0.75

CHURN_GREAT = 0.025
CHURN_GOOD = 0.05

REFERRAL_GREAT = 0.15
REFERRAL_GOOD = 0.10

GROWTH_EXCELLENT = 0.15
GROWTH_GOOD = 0.10


class BenchmarkReport(BaseModel):
    ltv_to_cac: BenchmarkStatus
    cac_payback: BenchmarkStatus
    gross_margin: BenchmarkStatus
    monthly_churn: BenchmarkStatus
    referral_rate: BenchmarkStatus
    monthly_growth: BenchmarkStatus


def ltv_cac_status(ratio: MetricValue) -> BenchmarkStatus:
    # Above 6x the business is likely under-investing in acquisition.
    if ratio.is_unbounded:
        return BenchmarkStatus.HIGH
    if ratio.value < LTV_CAC_POOR:
        return BenchmarkStatus.POOR
    if ratio.value < LTV_CAC_MEDIAN:
        return BenchmarkStatus.WARNING
    if ratio.value <= LTV_CAC_GOOD:
        return BenchmarkStatus.GOOD
    return BenchmarkStatus.HIGH


def cac_payback_status(months: MetricValue) -> BenchmarkStatus:
    if months.is_unbounded:
        return BenchmarkStatus.POOR
    if months.value <= CAC_PAYBACK_EXCELLENT:
        return BenchmarkStatus.EXCELLENT
    if months.value <= CAC_PAYBACK_GOOD:
        return BenchmarkStatus.GOOD
    if months.value <= CAC_PAYBACK_ACCEPTABLE:
        return BenchmarkStatus.WARNING
    return BenchmarkStatus.POOR


def gross_margin_status(margin: float) -> BenchmarkStatus:
    if margin >= GROSS_MARGIN_TARGET:
        return BenchmarkStatus.EXCELLENT
    if margin >= GROSS_MARGIN_MINIMUM:
        return BenchmarkStatus.GOOD
    return BenchmarkStatus.WARNING


def monthly_churn_status(churn: float) -> BenchmarkStatus:
    if churn <= CHURN_GREAT:
        return BenchmarkStatus.EXCELLENT
    if churn <= CHURN_GOOD:
        return BenchmarkStatus.GOOD
    return BenchmarkStatus.WARNING


def referral_rate_status(rate: float) -> BenchmarkStatus:
    if rate >= REFERRAL_GREAT:
        return BenchmarkStatus.EXCELLENT
    if rate >= REFERRAL_GOOD:
        return BenchmarkStatus.GOOD
    return BenchmarkStatus.WARNING


def monthly_growth_status(rate: float) -> BenchmarkStatus:
    if rate >= GROWTH_EXCELLENT:
        return BenchmarkStatus.EXCELLENT
    if rate >= GROWTH_GOOD:
        return BenchmarkStatus.GOOD
    return BenchmarkStatus.WARNING


def evaluate_benchmarks(result: ScenarioResult) -> BenchmarkReport:
    metrics = result.summary_metrics
    inputs = result.inputs
    return BenchmarkReport(
        ltv_to_cac=ltv_cac_status(metrics.ltv_to_cac),
        cac_payback=cac_payback_status(metrics.cac_payback_months),
        gross_margin=gross_margin_status(metrics.gross_margin),
        monthly_churn=monthly_churn_status(inputs.monthly_churn),
        referral_rate=referral_rate_status(inputs.customer_referral_rate),
        monthly_growth=monthly_growth_status(inputs.monthly_growth_rate),
    )
