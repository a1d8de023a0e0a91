from __future__ import annotations

import pytest

from bizmodel_app.models.common import WarningCode
from bizmodel_app.models.tiers import Tier, TierPatch
from bizmodel_app.services.tiers import (
    add_tier,
    calculate_arpu,
    delete_tier,
    distribution_total,
    toggle_lock,
    update_tier,
    validate_distribution,
)


def make_tiers(*shares, locked=()):
    prices = [29.0, 79.0, 199.0, 499.0]
    return tuple(
        Tier(id=name, name=name.upper(), monthly_price=prices[idx], distribution=share, is_locked=name in locked)
        for idx, (name, share) in enumerate(zip("abcd", shares))
    )


def shares(tiers):
    return [tier.distribution for tier in tiers]


def test_arpu_is_distribution_weighted_price():
    assert calculate_arpu(make_tiers(0.6, 0.3, 0.1)) == pytest.approx(61.0)


def test_add_tier_takes_share_proportionally_from_unlocked():
    result = add_tier(make_tiers(0.6, 0.3, 0.1), name="Team", monthly_price=49.0)
    assert result.applied
    assert shares(result.tiers) == pytest.approx([0.54, 0.27, 0.09, 0.10])
    assert result.tiers[-1].name == "Team"
    assert result.tiers[-1].monthly_price == 49.0
    assert not result.warnings


def test_add_tier_leaves_locked_tiers_alone():
    result = add_tier(make_tiers(0.6, 0.3, 0.1, locked=("a",)))
    assert shares(result.tiers) == pytest.approx([0.6, 0.225, 0.075, 0.1])
    assert result.tiers[-1].name == "Tier 4"


def test_add_tier_takes_at_most_the_unlocked_share():
    result = add_tier(make_tiers(0.95, 0.05, locked=("a",)))
    assert shares(result.tiers) == pytest.approx([0.95, 0.0, 0.05])


def test_add_tier_with_everything_locked_is_zero_sized():
    result = add_tier(make_tiers(0.7, 0.3, locked=("a", "b")))
    assert result.applied
    assert shares(result.tiers) == pytest.approx([0.7, 0.3, 0.0])


def test_add_tier_generates_unique_ids():
    tiers = make_tiers(1.0)
    first = add_tier(tiers).tiers
    second = add_tier(first).tiers
    assert len({tier.id for tier in second}) == 3


def test_edit_distribution_rebalances_other_unlocked_tiers():
    result = update_tier(make_tiers(0.6, 0.3, 0.1), "a", TierPatch(distribution=0.5))
    assert shares(result.tiers) == pytest.approx([0.5, 0.375, 0.125])


def test_edit_distribution_respects_locked_tiers():
    result = update_tier(make_tiers(0.6, 0.3, 0.1, locked=("c",)), "a", TierPatch(distribution=0.5))
    assert shares(result.tiers) == pytest.approx([0.5, 0.4, 0.1])


def test_edit_distribution_spreads_evenly_when_others_are_empty():
    result = update_tier(make_tiers(1.0, 0.0, 0.0), "a", TierPatch(distribution=0.4))
    assert shares(result.tiers) == pytest.approx([0.4, 0.3, 0.3])


def test_overshooting_edit_is_kept_and_flagged():
    result = update_tier(make_tiers(0.3, 0.2, 0.5, locked=("c",)), "a", TierPatch(distribution=0.8))
    assert result.applied
    assert shares(result.tiers) == pytest.approx([0.8, 0.0, 0.5])
    assert [warning.code for warning in result.warnings] == [WarningCode.DISTRIBUTION_SUM]


def test_edit_distribution_of_locked_tier_is_rejected():
    tiers = make_tiers(0.6, 0.4, locked=("a",))
    result = update_tier(tiers, "a", TierPatch(distribution=0.2))
    assert not result.applied
    assert result.tiers == tiers
    assert "locked" in result.message


def test_edit_price_and_name_has_no_redistribution():
    tiers = make_tiers(0.6, 0.3, 0.1)
    result = update_tier(tiers, "b", TierPatch(name="  Growth ", monthly_price=99.0))
    assert shares(result.tiers) == shares(tiers)
    assert result.tiers[1].name == "Growth"
    assert result.tiers[1].monthly_price == 99.0
    assert result.tiers[1].id == "b"


def test_unknown_tier_is_rejected_unchanged():
    tiers = make_tiers(0.6, 0.4)
    for result in (
        update_tier(tiers, "zz", TierPatch(monthly_price=1.0)),
        toggle_lock(tiers, "zz"),
        delete_tier(tiers, "zz"),
    ):
        assert not result.applied
        assert result.tiers == tiers


def test_toggle_lock_flips_flag_only():
    tiers = make_tiers(0.6, 0.4)
    locked = toggle_lock(tiers, "b").tiers
    assert locked[1].is_locked
    assert shares(locked) == shares(tiers)
    assert not toggle_lock(locked, "b").tiers[1].is_locked


def test_delete_redistributes_to_unlocked_proportionally():
    result = delete_tier(make_tiers(0.6, 0.3, 0.1), "c")
    assert [tier.id for tier in result.tiers] == ["a", "b"]
    assert shares(result.tiers) == pytest.approx([0.6 + 0.1 * 0.6 / 0.9, 0.3 + 0.1 * 0.3 / 0.9])


def test_delete_with_only_locked_tiers_left_gives_share_to_first():
    result = delete_tier(make_tiers(0.6, 0.3, 0.1, locked=("a", "b")), "c")
    assert shares(result.tiers) == pytest.approx([0.7, 0.3])
    assert result.tiers[0].is_locked


def test_delete_with_empty_unlocked_tiers_splits_evenly():
    result = delete_tier(make_tiers(0.8, 0.0, 0.0, 0.2, locked=("a",)), "d")
    assert shares(result.tiers) == pytest.approx([0.8, 0.1, 0.1])


def test_delete_last_tier_is_rejected():
    tiers = make_tiers(1.0)
    result = delete_tier(tiers, "a")
    assert not result.applied
    assert result.tiers == tiers


def test_distribution_stays_normalized_across_operation_sequence():
    tiers = make_tiers(0.6, 0.3, 0.1)
    steps = [
        lambda t: add_tier(t, tier_id="d"),
        lambda t: toggle_lock(t, "b"),
        lambda t: update_tier(t, "a", TierPatch(distribution=0.35)),
        lambda t: add_tier(t, tier_id="e"),
        lambda t: delete_tier(t, "c"),
        lambda t: toggle_lock(t, "b"),
        lambda t: update_tier(t, "d", TierPatch(distribution=0.2, monthly_price=10.0)),
        lambda t: delete_tier(t, "a"),
        lambda t: add_tier(t, tier_id="f"),
    ]
    for step in steps:
        result = step(tiers)
        assert result.applied
        tiers = result.tiers
        assert abs(distribution_total(tiers) - 1.0) <= 0.01
        assert not validate_distribution(tiers)
