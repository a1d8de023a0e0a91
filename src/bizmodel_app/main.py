from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from fastapi import Depends, FastAPI, HTTPException

from .config import get_engine_config
from .models.comparison import NamedScenario
from .models.inputs import ModelInputs
from .models.scenario import StoredScenario
from .models.tiers import Tier, TierOperationResult
from .repository import InMemoryScenarioRepository, ScenarioNotFoundError, ScenarioRepository
from .sample_data import build_default_inputs
from .schemas import (
    ScenarioCompareRequest,
    ScenarioCompareResponse,
    ScenarioCreateRequest,
    ScenarioListResponse,
    ScenarioRunRequest,
    ScenarioRunResponse,
    ScenarioUpdateRequest,
    TierAddRequest,
    TierTargetRequest,
    TierUpdateRequest,
)
from .services.benchmarks import evaluate_benchmarks
from .services.calculator import ScenarioCalculator
from .services.comparator import ScenarioComparator
from .services.tiers import add_tier, delete_tier, toggle_lock, update_tier

config = get_engine_config()
logging.basicConfig(level=config.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Growth Scenario Engine", version="0.1.0")

_repository = InMemoryScenarioRepository()
_calculator = ScenarioCalculator(cache_size=config.cache_size)
_comparator = ScenarioComparator(_calculator, max_workers=config.compare_max_workers)


def get_repository() -> ScenarioRepository:
    return _repository


def get_calculator() -> ScenarioCalculator:
    return _calculator


def get_comparator() -> ScenarioComparator:
    return _comparator


def _load(repository: ScenarioRepository, scenario_id: str) -> StoredScenario:
    try:
        return repository.get(scenario_id)
    except ScenarioNotFoundError:
        raise HTTPException(status_code=404, detail=f"Scenario {scenario_id} not found")


def _run_response(calculator: ScenarioCalculator, inputs: ModelInputs) -> ScenarioRunResponse:
    result = calculator.run(inputs)
    return ScenarioRunResponse(result=result, benchmarks=evaluate_benchmarks(result))


def _compare(comparator: ScenarioComparator, scenarios: List[NamedScenario]) -> ScenarioCompareResponse:
    try:
        comparison = comparator.compare(scenarios)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ScenarioCompareResponse(comparison=comparison)


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/defaults", response_model=ModelInputs)
def default_inputs() -> ModelInputs:
    return build_default_inputs()


@app.post("/scenarios", response_model=StoredScenario)
def create_scenario(
    payload: ScenarioCreateRequest,
    repository: ScenarioRepository = Depends(get_repository),
) -> StoredScenario:
    inputs = payload.inputs
    if payload.clone_from:
        inputs = _load(repository, payload.clone_from).inputs
    scenario = repository.create(payload.name, inputs, payload.description)
    logger.info("Created scenario %s (%s)", scenario.id, scenario.name)
    return scenario


@app.get("/scenarios", response_model=ScenarioListResponse)
def list_scenarios(repository: ScenarioRepository = Depends(get_repository)) -> ScenarioListResponse:
    return ScenarioListResponse(scenarios=repository.list())


@app.get("/scenarios/{scenario_id}", response_model=StoredScenario)
def get_scenario(scenario_id: str, repository: ScenarioRepository = Depends(get_repository)) -> StoredScenario:
    return _load(repository, scenario_id)


@app.put("/scenarios/{scenario_id}", response_model=StoredScenario)
def update_scenario(
    scenario_id: str,
    payload: ScenarioUpdateRequest,
    repository: ScenarioRepository = Depends(get_repository),
) -> StoredScenario:
    current = _load(repository, scenario_id)
    scenario = repository.update(scenario_id, payload.name or current.name, payload.inputs or current.inputs)
    logger.info("Updated scenario %s", scenario_id)
    return scenario


@app.delete("/scenarios/{scenario_id}")
def delete_scenario(scenario_id: str, repository: ScenarioRepository = Depends(get_repository)) -> Dict[str, str]:
    _load(repository, scenario_id)
    repository.delete(scenario_id)
    logger.info("Deleted scenario %s", scenario_id)
    return {"status": "deleted", "scenario_id": scenario_id}


@app.post("/run", response_model=ScenarioRunResponse)
def run_scenario(
    payload: ScenarioRunRequest,
    repository: ScenarioRepository = Depends(get_repository),
    calculator: ScenarioCalculator = Depends(get_calculator),
) -> ScenarioRunResponse:
    inputs: Optional[ModelInputs] = payload.inputs
    if inputs is None and payload.scenario_id:
        inputs = _load(repository, payload.scenario_id).inputs
    if inputs is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return _run_response(calculator, inputs)


@app.get("/scenarios/{scenario_id}/run", response_model=ScenarioRunResponse)
def get_scenario_projection(
    scenario_id: str,
    repository: ScenarioRepository = Depends(get_repository),
    calculator: ScenarioCalculator = Depends(get_calculator),
) -> ScenarioRunResponse:
    return _run_response(calculator, _load(repository, scenario_id).inputs)


@app.post("/compare", response_model=ScenarioCompareResponse)
def compare(
    payload: ScenarioCompareRequest,
    repository: ScenarioRepository = Depends(get_repository),
    comparator: ScenarioComparator = Depends(get_comparator),
) -> ScenarioCompareResponse:
    scenarios = list(payload.scenarios)
    for scenario_id in payload.scenario_ids:
        stored = _load(repository, scenario_id)
        scenarios.append(NamedScenario(name=stored.name, inputs=stored.inputs))
    return _compare(comparator, scenarios)


@app.get("/scenarios/{scenario_id}/compare", response_model=ScenarioCompareResponse)
def compare_scenarios(
    scenario_id: str,
    ids: str,
    repository: ScenarioRepository = Depends(get_repository),
    comparator: ScenarioComparator = Depends(get_comparator),
) -> ScenarioCompareResponse:
    base_ids = [scenario_id] + [part for part in ids.split(",") if part]
    scenarios = []
    for _id in base_ids:
        stored = _load(repository, _id)
        scenarios.append(NamedScenario(name=stored.name, inputs=stored.inputs))
    return _compare(comparator, scenarios)


def _tier_response(tiers: Tuple[Tier, ...], tier_id: str, result: TierOperationResult) -> TierOperationResult:
    if not any(tier.id == tier_id for tier in tiers):
        raise HTTPException(status_code=404, detail=result.message or f"Tier {tier_id} not found")
    if not result.applied:
        raise HTTPException(status_code=422, detail=result.message)
    return result


@app.post("/tiers/add", response_model=TierOperationResult)
def add_pricing_tier(payload: TierAddRequest) -> TierOperationResult:
    return add_tier(payload.tiers, name=payload.name, monthly_price=payload.monthly_price)


@app.post("/tiers/update", response_model=TierOperationResult)
def update_pricing_tier(payload: TierUpdateRequest) -> TierOperationResult:
    result = update_tier(payload.tiers, payload.tier_id, payload.patch)
    return _tier_response(payload.tiers, payload.tier_id, result)


@app.post("/tiers/delete", response_model=TierOperationResult)
def delete_pricing_tier(payload: TierTargetRequest) -> TierOperationResult:
    result = delete_tier(payload.tiers, payload.tier_id)
    return _tier_response(payload.tiers, payload.tier_id, result)


@app.post("/tiers/toggle-lock", response_model=TierOperationResult)
def toggle_pricing_tier_lock(payload: TierTargetRequest) -> TierOperationResult:
    result = toggle_lock(payload.tiers, payload.tier_id)
    return _tier_response(payload.tiers, payload.tier_id, result)
