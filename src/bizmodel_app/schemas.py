from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from .models.comparison import NamedScenario, ScenarioComparison
from .models.inputs import ModelInputs
from .models.results import ScenarioResult
from .models.scenario import StoredScenario
from .models.tiers import Tier, TierPatch
from .services.benchmarks import BenchmarkReport


class ScenarioCreateRequest(BaseModel):
    name: str
    inputs: ModelInputs = Field(default_factory=ModelInputs)
    description: Optional[str] = None
    clone_from: Optional[str] = Field(default=None, description="Scenario ID whose inputs are copied")


class ScenarioUpdateRequest(BaseModel):
    name: Optional[str] = None
    inputs: Optional[ModelInputs] = None


class ScenarioListResponse(BaseModel):
    scenarios: List[StoredScenario]


class ScenarioRunRequest(BaseModel):
    scenario_id: Optional[str] = None
    inputs: Optional[ModelInputs] = None


class ScenarioRunResponse(BaseModel):
    result: ScenarioResult
    benchmarks: BenchmarkReport


class ScenarioCompareRequest(BaseModel):
    scenarios: List[NamedScenario] = Field(default_factory=list)
    scenario_ids: List[str] = Field(default_factory=list, description="Stored scenarios appended after inline ones")


class ScenarioCompareResponse(BaseModel):
    comparison: ScenarioComparison


class TierAddRequest(BaseModel):
    tiers: Tuple[Tier, ...]
    name: Optional[str] = None
    monthly_price: float = Field(0.0, ge=0)


class TierUpdateRequest(BaseModel):
    tiers: Tuple[Tier, ...]
    tier_id: str
    patch: TierPatch


class TierTargetRequest(BaseModel):
    tiers: Tuple[Tier, ...]
    tier_id: str
