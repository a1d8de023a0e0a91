from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

from .models.inputs import ModelInputs
from .models.scenario import StoredScenario


class ScenarioNotFoundError(KeyError):
    pass


class ScenarioRepository(Protocol):
    def create(self, name: str, inputs: ModelInputs, description: Optional[str] = None) -> StoredScenario: ...

    def list(self) -> List[StoredScenario]: ...

    def get(self, scenario_id: str) -> StoredScenario: ...

    def update(self, scenario_id: str, name: str, inputs: ModelInputs) -> StoredScenario: ...

    def delete(self, scenario_id: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryScenarioRepository:
    """Named scenarios kept in process memory, in creation order."""

    def __init__(self) -> None:
        self._scenarios: Dict[str, StoredScenario] = {}

    def create(self, name: str, inputs: ModelInputs, description: Optional[str] = None) -> StoredScenario:
        now = datetime.now(timezone.utc)
        scenario = StoredScenario(
            id=uuid.uuid4().hex,
            name=name,
            inputs=inputs,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self._scenarios[scenario.id] = scenario
        return scenario

    def list(self) -> List[StoredScenario]:
        return list(self._scenarios.values())

    def get(self, scenario_id: str) -> StoredScenario:
        scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            raise ScenarioNotFoundError(scenario_id)
        return scenario

    def update(self, scenario_id: str, name: str, inputs: ModelInputs) -> StoredScenario:
        scenario = self.get(scenario_id).model_copy(
            update={"name": name, "inputs": inputs, "updated_at": datetime.now(timezone.utc)}
        )
        self._scenarios[scenario_id] = scenario
        return scenario

    def delete(self, scenario_id: str) -> None:
        if self._scenarios.pop(scenario_id, None) is None:
            raise ScenarioNotFoundError(scenario_id)

    def clear(self) -> None:
        self._scenarios.clear()
