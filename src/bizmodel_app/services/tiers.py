"""Pricing tier operations that keep tier distributions summing to 1.

Every operation is a pure function over a tuple of tiers and returns a
``TierOperationResult``. Rejected operations hand back the original tiers
with ``applied=False`` so callers never hold an invalid tier set.
"""
from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional, Sequence

from ..config import get_engine_config
from ..models.common import ValidationWarning, WarningCode
from ..models.tiers import Tier, TierOperationResult, TierPatch

logger = logging.getLogger(__name__)

NEW_TIER_SHARE = 0.10


def new_tier_id() -> str:
    return uuid.uuid4().hex[:12]


def calculate_arpu(tiers: Sequence[Tier]) -> float:
    """Distribution-weighted average monthly price."""
    return sum(tier.monthly_price * tier.distribution for tier in tiers)


def distribution_total(tiers: Sequence[Tier]) -> float:
    return sum(tier.distribution for tier in tiers)


def validate_distribution(tiers: Sequence[Tier], tolerance: Optional[float] = None) -> List[ValidationWarning]:
    if tolerance is None:
        tolerance = get_engine_config().distribution_tolerance
    total = distribution_total(tiers)
    if abs(total - 1.0) <= tolerance:
        return []
    return [
        ValidationWarning(
            code=WarningCode.DISTRIBUTION_SUM,
            message=f"Tier distributions sum to {total:.1%}, expected 100%",
        )
    ]


def _result(tiers: Sequence[Tier]) -> TierOperationResult:
    tiers = tuple(tiers)
    warnings = validate_distribution(tiers)
    for warning in warnings:
        logger.warning(warning.message)
    return TierOperationResult(tiers=tiers, warnings=warnings)


def _rejected(tiers: Sequence[Tier], message: str) -> TierOperationResult:
    logger.warning("Tier operation rejected: %s", message)
    return TierOperationResult(tiers=tuple(tiers), applied=False, message=message)


def _find(tiers: Sequence[Tier], tier_id: str) -> Optional[int]:
    return next((idx for idx, tier in enumerate(tiers) if tier.id == tier_id), None)


def _with_share(tier: Tier, share: float) -> Tier:
    return tier.model_copy(update={"distribution": min(1.0, max(0.0, share))})


def add_tier(
    tiers: Sequence[Tier],
    *,
    name: Optional[str] = None,
    monthly_price: float = 0.0,
    tier_id: Optional[str] = None,
) -> TierOperationResult:
    tier_id = tier_id or new_tier_id()
    if _find(tiers, tier_id) is not None:
        return _rejected(tiers, f"Tier {tier_id} already exists")

    unlocked_total = sum(tier.distribution for tier in tiers if not tier.is_locked)
    take = min(NEW_TIER_SHARE, unlocked_total)

    updated: List[Tier] = []
    for tier in tiers:
        if tier.is_locked or take == 0:
            updated.append(tier)
            continue
        updated.append(_with_share(tier, tier.distribution - take * (tier.distribution / unlocked_total)))

    updated.append(
        Tier(
            id=tier_id,
            name=name or f"Tier {len(tiers) + 1}",
            monthly_price=monthly_price,
            distribution=take,
        )
    )
    logger.debug("Added tier %s with share %.4f", tier_id, take)
    return _result(updated)


def _redistribute_edit(tiers: Sequence[Tier], index: int, value: float) -> List[Tier]:
    locked_sum = sum(tier.distribution for idx, tier in enumerate(tiers) if tier.is_locked and idx != index)
    remaining = max(0.0, 1.0 - locked_sum - value)
    others = [idx for idx, tier in enumerate(tiers) if idx != index and not tier.is_locked]
    others_total = sum(tiers[idx].distribution for idx in others)

    shares: Dict[int, float] = {}
    for idx in others:
        if others_total > 0:
            shares[idx] = remaining * (tiers[idx].distribution / others_total)
        else:
            shares[idx] = remaining / len(others)

    updated: List[Tier] = []
    for idx, tier in enumerate(tiers):
        if idx == index:
            # The edited share is kept as entered, even when it overshoots.
            updated.append(tier.model_copy(update={"distribution": value}))
        elif idx in shares:
            updated.append(_with_share(tier, shares[idx]))
        else:
            updated.append(tier)
    return updated


def update_tier(tiers: Sequence[Tier], tier_id: str, patch: TierPatch) -> TierOperationResult:
    index = _find(tiers, tier_id)
    if index is None:
        return _rejected(tiers, f"Tier {tier_id} not found")

    tier = tiers[index]
    if patch.distribution is not None and tier.is_locked and patch.distribution != tier.distribution:
        return _rejected(tiers, f"Tier {tier_id} is locked; unlock it before changing its distribution")

    updated = list(tiers)
    if patch.distribution is not None and patch.distribution != tier.distribution:
        updated = _redistribute_edit(updated, index, patch.distribution)

    changes = {}
    if patch.name is not None and patch.name.strip():
        changes["name"] = patch.name.strip()
    if patch.monthly_price is not None:
        changes["monthly_price"] = patch.monthly_price
    if changes:
        updated[index] = updated[index].model_copy(update=changes)
    return _result(updated)


def toggle_lock(tiers: Sequence[Tier], tier_id: str) -> TierOperationResult:
    index = _find(tiers, tier_id)
    if index is None:
        return _rejected(tiers, f"Tier {tier_id} not found")
    updated = list(tiers)
    updated[index] = updated[index].model_copy(update={"is_locked": not updated[index].is_locked})
    return _result(updated)


def delete_tier(tiers: Sequence[Tier], tier_id: str) -> TierOperationResult:
    index = _find(tiers, tier_id)
    if index is None:
        return _rejected(tiers, f"Tier {tier_id} not found")
    if len(tiers) == 1:
        return _rejected(tiers, "At least one pricing tier is required")

    freed = tiers[index].distribution
    remaining: List[Tier] = [tier for idx, tier in enumerate(tiers) if idx != index]
    unlocked = [idx for idx, tier in enumerate(remaining) if not tier.is_locked]

    if not unlocked:
        # Everything else is locked; the first tier absorbs the share so the total is kept.
        remaining[0] = _with_share(remaining[0], remaining[0].distribution + freed)
        return _result(remaining)

    unlocked_total = sum(remaining[idx].distribution for idx in unlocked)
    for idx in unlocked:
        tier = remaining[idx]
        if unlocked_total > 0:
            extra = freed * (tier.distribution / unlocked_total)
        else:
            extra = freed / len(unlocked)
        remaining[idx] = _with_share(tier, tier.distribution + extra)
    logger.debug("Deleted tier %s, redistributed %.4f", tier_id, freed)
    return _result(remaining)
