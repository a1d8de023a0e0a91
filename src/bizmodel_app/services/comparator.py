from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from ..config import get_engine_config
from ..models.common import MetricValue, finite
from ..models.comparison import (
    ComparisonMetricRow,
    ComparisonPoint,
    InputDifferenceRow,
    NamedScenario,
    ScenarioComparison,
)
from ..models.results import ScenarioResult
from .calculator import ScenarioCalculator
from .formatting import format_currency, format_number, format_percent

logger = logging.getLogger(__name__)

COMPARED_INPUTS = (
    "monthly_growth_rate",
    "starting_paid_traffic",
    "organic_traffic",
    "conversion_rate",
    "customer_referral_rate",
    "monthly_churn",
    "monthly_ad_spend",
    "rent",
    "minimum_success_criteria",
    "cc_processing_fees",
    "staffing_costs",
    "office_supplies",
    "business_insurance",
    "inventory_costs",
    "delivery_costs",
    "inference_costs",
)


class ScenarioComparator:
    def __init__(self, calculator: Optional[ScenarioCalculator] = None, max_workers: Optional[int] = None) -> None:
        self.calculator = calculator or ScenarioCalculator()
        self.max_workers = max_workers or get_engine_config().compare_max_workers

    def compare(self, scenarios: Sequence[NamedScenario]) -> ScenarioComparison:
        if len(scenarios) < 2:
            raise ValueError("At least two scenarios are required for a comparison")

        inputs = [scenario.inputs for scenario in scenarios]
        if self.max_workers > 1:
            # map() yields in submission order regardless of completion order.
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(inputs))) as executor:
                results = list(executor.map(self.calculator.run, inputs))
        else:
            results = [self.calculator.run(item) for item in inputs]
        logger.debug("Compared %d scenarios", len(results))

        return ScenarioComparison(
            scenario_names=[scenario.name for scenario in scenarios],
            results=tuple(results),
            metrics=self._metric_rows(results),
            input_differences=self._input_differences(results),
            series=self._series(results),
        )

    def _metric_rows(self, results: List[ScenarioResult]) -> List[ComparisonMetricRow]:
        def row(key: str, label: str, values: List[MetricValue], fmt: Callable[[MetricValue], str]) -> ComparisonMetricRow:
            return ComparisonMetricRow(key=key, label=label, values=values, display=[fmt(v) for v in values])

        def compact(value: MetricValue) -> str:
            return format_currency(value, compact=True)

        def ratio(value: MetricValue) -> str:
            return f"{format_number(value, 1)}x"

        metrics = [r.summary_metrics for r in results]
        return [
            row("net_profit_fy1", "Net Profit FY1", [finite(m.net_profit_fy1) for m in metrics], compact),
            row("net_profit_fy2", "Net Profit FY2", [finite(m.net_profit_fy2) for m in metrics], compact),
            row("net_profit_fy3", "Net Profit FY3", [finite(m.net_profit_fy3) for m in metrics], compact),
            row("ltv", "LTV", [m.ltv for m in metrics], format_currency),
            row("ltv_to_cac", "LTV:CAC Ratio", [m.ltv_to_cac for m in metrics], ratio),
            row("cagr", "CAGR", [finite(m.cagr) for m in metrics], format_percent),
            row(
                "end_customers",
                "End Customers (Y3)",
                [finite(r.yearly_summaries[-1].end_retained) for r in results],
                format_number,
            ),
        ]

    def _input_differences(self, results: List[ScenarioResult]) -> List[InputDifferenceRow]:
        rows: List[InputDifferenceRow] = []
        for key in COMPARED_INPUTS:
            values = [float(getattr(r.inputs, key)) for r in results]
            rows.append(InputDifferenceRow(key=key, values=values, differs=len(set(values)) > 1))

        arpu = [r.summary_metrics.arpu for r in results]
        rows.append(InputDifferenceRow(key="arpu", values=arpu, differs=len(set(arpu)) > 1))
        # Unbounded CAC has no float value; it is reported as 0 with its own flag.
        cac = [0.0 if r.summary_metrics.cac.is_unbounded else r.summary_metrics.cac.value for r in results]
        cac_kinds = {r.summary_metrics.cac.kind for r in results}
        rows.append(InputDifferenceRow(key="cac", values=cac, differs=len(set(cac)) > 1 or len(cac_kinds) > 1))
        return rows

    def _series(self, results: List[ScenarioResult]) -> List[ComparisonPoint]:
        points: List[ComparisonPoint] = []
        for month_index in range(len(results[0].monthly_records)):
            records = [r.monthly_records[month_index] for r in results]
            points.append(
                ComparisonPoint(
                    month=month_index + 1,
                    label=f"M{month_index + 1}",
                    customers=[record.retained_customers for record in records],
                    revenue=[record.gross_revenue for record in records],
                    profit=[record.net_profit for record in records],
                )
            )
        return points
