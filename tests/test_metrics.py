from __future__ import annotations

import pytest

from bizmodel_app.models.common import UNBOUNDED, finite
from bizmodel_app.services.metrics import (
    average_lifespan_months,
    cac_from_ad_spend,
    cac_payback_months,
    cagr,
    gross_margin_from_cogs,
    ltv,
    ltv_to_cac_ratio,
    safe_ratio,
)


def test_cagr_compounds_monthly_rate():
    assert cagr(0.10) == pytest.approx(1.1 ** 12 - 1)
    assert cagr(0.0) == 0.0


def test_lifespan_is_inverse_churn_and_unbounded_without_churn():
    assert average_lifespan_months(0.05).value == pytest.approx(20.0)
    assert average_lifespan_months(1.0) == finite(1.0)
    assert average_lifespan_months(0.0) == UNBOUNDED


def test_ltv_uses_margin_and_lifespan():
    value = ltv(61.0, average_lifespan_months(0.035), 0.925)
    assert value.value == pytest.approx(61.0 * 0.925 / 0.035)
    assert ltv(61.0, UNBOUNDED, 0.925).is_unbounded


def test_cac_payback():
    assert cac_payback_months(50.0, 0.8, finite(120.0)).value == pytest.approx(3.0)
    assert cac_payback_months(0.0, 0.8, finite(120.0)) == UNBOUNDED
    assert cac_payback_months(50.0, 0.0, finite(120.0)) == UNBOUNDED
    assert cac_payback_months(50.0, 0.8, UNBOUNDED) == UNBOUNDED


def test_ltv_to_cac_ratio_singularities():
    assert ltv_to_cac_ratio(finite(900.0), finite(300.0)).value == pytest.approx(3.0)
    assert ltv_to_cac_ratio(finite(900.0), finite(0.0)) == UNBOUNDED
    assert ltv_to_cac_ratio(UNBOUNDED, finite(300.0)) == UNBOUNDED
    assert ltv_to_cac_ratio(finite(900.0), UNBOUNDED) == finite(0.0)


def test_gross_margin_clamps_over_specified_cogs():
    assert gross_margin_from_cogs([0.025, 0.2, 0.0, 0.0]) == pytest.approx(0.775)
    assert gross_margin_from_cogs([0.6, 0.5, 0.0, 0.0]) == 0.0


def test_cac_from_launch_month_ad_spend():
    assert cac_from_ad_spend(1200.0, 2000.0, 0.02).value == pytest.approx(30.0)
    assert cac_from_ad_spend(1200.0, 0.0, 0.02) == UNBOUNDED
    assert cac_from_ad_spend(1200.0, 2000.0, 0.0) == UNBOUNDED
    # 20 x 0.02 = 0.4 rounds to no launch customers
    assert cac_from_ad_spend(1200.0, 20.0, 0.02) == UNBOUNDED
    assert cac_from_ad_spend(1200.0, 25.0, 0.02).value == pytest.approx(2400.0)


def test_safe_ratio_serializes_as_tagged_value():
    assert safe_ratio(1.0, 0.0).model_dump() == {"kind": "unbounded"}
    assert safe_ratio(1.0, 4.0).model_dump() == {"kind": "finite", "value": 0.25}
