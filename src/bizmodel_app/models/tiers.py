from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .common import ValidationWarning


class Tier(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    monthly_price: float = Field(0.0, ge=0, description="List price per customer per month")
    distribution: float = Field(..., ge=0, le=1, description="Share of customers on this tier")
    is_locked: bool = False


class TierPatch(BaseModel):
    name: Optional[str] = None
    monthly_price: Optional[float] = Field(default=None, ge=0)
    distribution: Optional[float] = Field(default=None, ge=0, le=1)


class TierOperationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    tiers: Tuple[Tier, ...]
    applied: bool = True
    message: Optional[str] = None
    warnings: List[ValidationWarning] = Field(default_factory=list)
