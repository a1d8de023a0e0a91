from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Finite(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["finite"] = "finite"
    value: float

    @property
    def is_unbounded(self) -> bool:
        return False


class Unbounded(BaseModel):
    """Result of a division by zero in a metric formula (e.g. zero churn)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unbounded"] = "unbounded"

    @property
    def is_unbounded(self) -> bool:
        return True


MetricValue = Annotated[Union[Finite, Unbounded], Field(discriminator="kind")]

UNBOUNDED = Unbounded()


def finite(value: float) -> Finite:
    return Finite(value=float(value))


class WarningCode(str, Enum):
    DISTRIBUTION_SUM = "distribution_sum"
    COGS_EXCEEDS_REVENUE = "cogs_exceeds_revenue"
    COST_RATIOS_EXCEED_REVENUE = "cost_ratios_exceed_revenue"


class ValidationWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: WarningCode
    message: str
