from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .common import MetricValue
from .inputs import ModelInputs
from .results import ScenarioResult


class NamedScenario(BaseModel):
    name: str
    inputs: ModelInputs = Field(default_factory=ModelInputs)


class ComparisonMetricRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    values: List[MetricValue]
    display: List[str]


class InputDifferenceRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    values: List[float]
    differs: bool


class ComparisonPoint(BaseModel):
    """One chart x-position; each list is indexed like ScenarioComparison.scenario_names."""

    model_config = ConfigDict(frozen=True)

    month: int
    label: str
    customers: List[int]
    revenue: List[float]
    profit: List[float]


class ScenarioComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario_names: List[str]
    results: Tuple[ScenarioResult, ...]
    metrics: List[ComparisonMetricRow]
    input_differences: List[InputDifferenceRow]
    series: List[ComparisonPoint]
