from __future__ import annotations

from bizmodel_app.models.common import UNBOUNDED, finite
from bizmodel_app.sample_data import build_example_inputs
from bizmodel_app.services.benchmarks import (
    BenchmarkStatus,
    cac_payback_status,
    evaluate_benchmarks,
    gross_margin_status,
    ltv_cac_status,
    monthly_churn_status,
    monthly_growth_status,
    referral_rate_status,
)
from bizmodel_app.services.calculator import run
from bizmodel_app.services.formatting import format_currency, format_number, format_percent


def test_ltv_cac_bands():
    assert ltv_cac_status(finite(2.0)) == BenchmarkStatus.POOR
    assert ltv_cac_status(finite(3.2)) == BenchmarkStatus.WARNING
    assert ltv_cac_status(finite(6.0)) == BenchmarkStatus.GOOD
    assert ltv_cac_status(finite(7.5)) == BenchmarkStatus.HIGH
    assert ltv_cac_status(UNBOUNDED) == BenchmarkStatus.HIGH


def test_cac_payback_bands():
    assert cac_payback_status(finite(4.0)) == BenchmarkStatus.EXCELLENT
    assert cac_payback_status(finite(12.0)) == BenchmarkStatus.GOOD
    assert cac_payback_status(finite(15.0)) == BenchmarkStatus.WARNING
    assert cac_payback_status(finite(24.0)) == BenchmarkStatus.POOR
    assert cac_payback_status(UNBOUNDED) == BenchmarkStatus.POOR


def test_rate_bands():
    assert gross_margin_status(0.85) == BenchmarkStatus.EXCELLENT
    assert gross_margin_status(0.76) == BenchmarkStatus.GOOD
    assert gross_margin_status(0.5) == BenchmarkStatus.WARNING
    assert monthly_churn_status(0.02) == BenchmarkStatus.EXCELLENT
    assert monthly_churn_status(0.04) == BenchmarkStatus.GOOD
    assert monthly_churn_status(0.12) == BenchmarkStatus.WARNING
    assert referral_rate_status(0.2) == BenchmarkStatus.EXCELLENT
    assert referral_rate_status(0.1) == BenchmarkStatus.GOOD
    assert referral_rate_status(0.05) == BenchmarkStatus.WARNING
    assert monthly_growth_status(0.15) == BenchmarkStatus.EXCELLENT
    assert monthly_growth_status(0.12) == BenchmarkStatus.GOOD
    assert monthly_growth_status(0.02) == BenchmarkStatus.WARNING


def test_evaluate_example_scenario():
    report = evaluate_benchmarks(run(build_example_inputs()))
    assert report.ltv_to_cac == BenchmarkStatus.HIGH
    assert report.cac_payback == BenchmarkStatus.EXCELLENT
    assert report.gross_margin == BenchmarkStatus.EXCELLENT
    assert report.monthly_churn == BenchmarkStatus.GOOD
    assert report.referral_rate == BenchmarkStatus.GOOD
    assert report.monthly_growth == BenchmarkStatus.GOOD


def test_formatting_handles_unbounded():
    assert format_currency(UNBOUNDED) == "∞"
    assert format_percent(UNBOUNDED) == "∞"
    assert format_number(UNBOUNDED) == "∞"


def test_formatting_values():
    assert format_currency(1234.4) == "$1,234"
    assert format_currency(finite(2_500_000), compact=True) == "$2.5M"
    assert format_currency(1500, compact=True) == "$1.5K"
    assert format_currency(-2500, compact=True) == "-$2.5K"
    assert format_percent(0.1234) == "12.3%"
    assert format_percent(finite(0.5), decimals=0) == "50%"
    assert format_number(1234567) == "1,234,567"
    assert format_number(finite(3.14159), 2) == "3.14"
