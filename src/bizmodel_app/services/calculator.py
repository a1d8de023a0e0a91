from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from ..config import MONTHS_PER_YEAR, PROJECTION_MONTHS, get_engine_config
from ..models.common import MetricValue, ValidationWarning, WarningCode
from ..models.costs import REVENUE_SCALED_COSTS, CostCategory
from ..models.inputs import ModelInputs
from ..models.results import CostBreakdown, MonthlyRecord, ScenarioResult
from .aggregator import build_yearly_summaries
from .metrics import cac_from_ad_spend, excel_round, summarize
from .tiers import calculate_arpu, validate_distribution

logger = logging.getLogger(__name__)


@dataclass
class RetentionState:
    previous_retained: int = 0


def validate_inputs(inputs: ModelInputs) -> List[ValidationWarning]:
    warnings = validate_distribution(inputs.pricing_tiers)
    cogs = sum(inputs.cogs_ratios())
    if cogs > 1:
        warnings.append(
            ValidationWarning(
                code=WarningCode.COGS_EXCEEDS_REVENUE,
                message=f"COGS ratios total {cogs:.1%} of revenue; gross margin is floored at 0%",
            )
        )
    revenue_costs = sum(inputs.revenue_cost_ratios())
    if revenue_costs >= 1:
        warnings.append(
            ValidationWarning(
                code=WarningCode.COST_RATIOS_EXCEED_REVENUE,
                message=f"Revenue-scaled costs total {revenue_costs:.1%}; every sale loses money",
            )
        )
    return warnings


class ScenarioCalculator:
    def __init__(self, cache_size: Optional[int] = None) -> None:
        if cache_size is None:
            cache_size = get_engine_config().cache_size
        self._project_cached = lru_cache(maxsize=cache_size)(self._project)

    def run(self, inputs: ModelInputs) -> ScenarioResult:
        return self._project_cached(inputs)

    def _project(self, inputs: ModelInputs) -> ScenarioResult:
        warnings = validate_inputs(inputs)
        for warning in warnings:
            logger.warning("Input warning (%s): %s", warning.code.value, warning.message)

        arpu = calculate_arpu(inputs.pricing_tiers)
        cac = cac_from_ad_spend(inputs.monthly_ad_spend, inputs.starting_paid_traffic, inputs.conversion_rate)
        state = RetentionState()

        monthly_records: List[MonthlyRecord] = []
        for month_index in range(PROJECTION_MONTHS):
            record = self._project_month(month_index, inputs, arpu, cac, state)
            monthly_records.append(record)
            state.previous_retained = record.retained_customers

        yearly_summaries = build_yearly_summaries(monthly_records)
        summary_metrics = summarize(inputs, arpu, yearly_summaries)
        logger.debug(
            "Projected %d months: end customers=%d, FY3 net profit=%.2f",
            len(monthly_records),
            monthly_records[-1].retained_customers,
            summary_metrics.net_profit_fy3,
        )
        return ScenarioResult(
            inputs=inputs,
            monthly_records=tuple(monthly_records),
            yearly_summaries=tuple(yearly_summaries),
            summary_metrics=summary_metrics,
            warnings=tuple(warnings),
        )

    def _project_month(
        self,
        month_index: int,
        inputs: ModelInputs,
        arpu: float,
        cac: MetricValue,
        state: RetentionState,
    ) -> MonthlyRecord:
        paid_traffic = inputs.starting_paid_traffic * (1 + inputs.monthly_growth_rate) ** month_index
        organic_traffic = inputs.organic_traffic
        paid_conversions = int(excel_round(paid_traffic * inputs.conversion_rate))

        previous_retained = state.previous_retained
        churn_count = int(excel_round(previous_retained * inputs.monthly_churn))
        retained, referrals = self._solve_retention(
            month_index, previous_retained, paid_conversions, churn_count, inputs.customer_referral_rate
        )

        gross_revenue = retained * arpu
        costs, total_operating_cost = self._compute_costs(inputs, gross_revenue, paid_conversions, cac)
        net_profit = gross_revenue - total_operating_cost

        month_in_year = month_index % MONTHS_PER_YEAR + 1
        period_start, month_name = self._calendar(inputs.start_date, month_index, month_in_year)

        return MonthlyRecord(
            month=month_index + 1,
            year=month_index // MONTHS_PER_YEAR + 1,
            month_in_year=month_in_year,
            month_name=month_name,
            period_start=period_start,
            paid_traffic=paid_traffic,
            organic_traffic=organic_traffic,
            total_traffic=paid_traffic + organic_traffic,
            paid_conversions=paid_conversions,
            referrals=referrals,
            previous_retained=previous_retained,
            churn_count=churn_count,
            retained_customers=retained,
            gross_revenue=gross_revenue,
            costs=costs,
            total_operating_cost=total_operating_cost,
            net_profit=net_profit,
            net_profit_margin=net_profit / gross_revenue if gross_revenue else 0.0,
        )

    def _solve_retention(
        self,
        month_index: int,
        previous_retained: int,
        paid_conversions: int,
        churn_count: int,
        referral_rate: float,
    ) -> Tuple[int, float]:
        """Closed-form solution of retained = base + retained * referral_rate.

        Referrals are a share of the very customer count they add to, so
        retained = base / (1 - referral_rate). The launch month has no
        customer base to refer from.
        """
        if month_index == 0:
            return paid_conversions, 0.0
        base = previous_retained + paid_conversions - churn_count
        retained = int(excel_round(base / (1 - referral_rate)))
        referrals = excel_round(retained * referral_rate, 2)
        return retained, referrals

    def _compute_costs(
        self,
        inputs: ModelInputs,
        gross_revenue: float,
        paid_conversions: int,
        cac: MetricValue,
    ) -> Tuple[CostBreakdown, float]:
        costs: Dict[CostCategory, float] = {}
        for category, ratio_field in REVENUE_SCALED_COSTS:
            costs[category] = gross_revenue * getattr(inputs, ratio_field)
        # An unbounded CAC means launch traffic converted nobody; acquisition
        # is not charged in any month.
        costs[CostCategory.CAC] = 0.0 if cac.is_unbounded or paid_conversions == 0 else paid_conversions * cac.value
        costs[CostCategory.RENT] = inputs.rent
        breakdown = CostBreakdown(**{category.value: value for category, value in costs.items()})
        return breakdown, breakdown.total()

    def _calendar(self, start_date: Optional[date], month_index: int, month_in_year: int) -> Tuple[Optional[date], str]:
        if start_date is None:
            return None, calendar.month_name[month_in_year]
        period_start = start_date + relativedelta(months=month_index)
        return period_start, calendar.month_name[period_start.month]


_default_calculator: Optional[ScenarioCalculator] = None


def run(inputs: ModelInputs) -> ScenarioResult:
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = ScenarioCalculator()
    return _default_calculator.run(inputs)
