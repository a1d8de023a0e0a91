from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from ..config import MONTHS_PER_YEAR
from ..models.results import MonthlyRecord, YearlySummary


def build_yearly_summaries(records: Sequence[MonthlyRecord]) -> List[YearlySummary]:
    """Roll monthly records up into 12-month windows.

    Flows are summed, the customer count is the year-end value and the margin
    is recomputed from the yearly totals instead of averaging monthly margins.
    """
    by_year: Dict[int, List[MonthlyRecord]] = defaultdict(list)
    for record in records:
        by_year[(record.month - 1) // MONTHS_PER_YEAR + 1].append(record)

    summaries: List[YearlySummary] = []
    for year in sorted(by_year.keys()):
        months = by_year[year]
        gross_revenue = sum(m.gross_revenue for m in months)
        net_profit = sum(m.net_profit for m in months)
        summaries.append(
            YearlySummary(
                year=year,
                total_paid_traffic=sum(m.paid_traffic for m in months),
                total_organic_traffic=sum(m.organic_traffic for m in months),
                total_traffic=sum(m.total_traffic for m in months),
                total_conversions=sum(m.paid_conversions for m in months),
                total_referrals=sum(m.referrals for m in months),
                total_churn=sum(m.churn_count for m in months),
                end_retained=months[-1].retained_customers,
                gross_revenue=gross_revenue,
                total_costs=sum(m.total_operating_cost for m in months),
                net_profit=net_profit,
                net_profit_margin=net_profit / gross_revenue if gross_revenue else 0.0,
            )
        )
    return summaries
