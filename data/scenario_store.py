"""Named scenario snapshots persisted as JSON files, one file per scenario."""

import json
import logging
import os
import uuid
from datetime import datetime
from typing import List, Optional

from models.state import SavedScenario, SimulationState
from data.serializer import state_from_dict, state_to_dict
from config.defaults import SCENARIO_STORE_DIR

logger = logging.getLogger(__name__)


class ScenarioNotFoundError(KeyError):
    """Raised when a scenario id has no stored snapshot."""


class ScenarioStore:
    """CRUD over saved scenarios in a directory of ``<scenario_id>.json`` files."""

    def __init__(self, directory: str = SCENARIO_STORE_DIR):
        self.directory = directory
        os.makedirs(self.directory, exist_ok=True)

    def _path(self, scenario_id: str) -> str:
        return os.path.join(self.directory, f"{scenario_id}.json")

    def _write(self, scenario: SavedScenario):
        payload = {
            "scenario_id": scenario.scenario_id,
            "name": scenario.name,
            "description": scenario.description,
            "created_at": scenario.created_at.isoformat(),
            "updated_at": scenario.updated_at.isoformat(),
            "state": state_to_dict(scenario.state),
        }
        with open(self._path(scenario.scenario_id), "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    def _read(self, path: str) -> SavedScenario:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"Scenario file {path} does not hold an object")
        return SavedScenario(
            scenario_id=payload["scenario_id"],
            name=payload["name"],
            description=payload.get("description", ""),
            created_at=datetime.fromisoformat(payload["created_at"]),
            updated_at=datetime.fromisoformat(payload["updated_at"]),
            state=state_from_dict(payload["state"]),
        )

    def create(self, name: str, state: SimulationState, description: str = "") -> SavedScenario:
        if not name or not name.strip():
            raise ValueError("Scenario name cannot be empty")
        now = datetime.now()
        scenario = SavedScenario(
            scenario_id=uuid.uuid4().hex,
            name=name.strip(),
            description=description,
            created_at=now,
            updated_at=now,
            state=state,
        )
        self._write(scenario)
        logger.info("Saved scenario '%s' (%s)", scenario.name, scenario.scenario_id)
        return scenario

    def get(self, scenario_id: str) -> SavedScenario:
        path = self._path(scenario_id)
        if not os.path.exists(path):
            raise ScenarioNotFoundError(scenario_id)
        return self._read(path)

    def list(self) -> List[SavedScenario]:
        """All saved scenarios, most recently updated first.

        Unreadable files are logged and skipped.
        """
        scenarios = []
        for filename in os.listdir(self.directory):
            if not filename.endswith(".json"):
                continue
            path = os.path.join(self.directory, filename)
            try:
                scenarios.append(self._read(path))
            except (ValueError, KeyError) as exc:
                logger.warning("Skipping unreadable scenario file %s: %s", filename, exc)
        return sorted(scenarios, key=lambda s: s.updated_at, reverse=True)

    def update(
        self,
        scenario_id: str,
        state: Optional[SimulationState] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> SavedScenario:
        existing = self.get(scenario_id)
        if name is not None and not name.strip():
            raise ValueError("Scenario name cannot be empty")
        scenario = SavedScenario(
            scenario_id=existing.scenario_id,
            name=name.strip() if name is not None else existing.name,
            description=description if description is not None else existing.description,
            created_at=existing.created_at,
            updated_at=datetime.now(),
            state=state if state is not None else existing.state,
        )
        self._write(scenario)
        logger.info("Updated scenario '%s' (%s)", scenario.name, scenario_id)
        return scenario

    def delete(self, scenario_id: str):
        path = self._path(scenario_id)
        if not os.path.exists(path):
            raise ScenarioNotFoundError(scenario_id)
        os.remove(path)
        logger.info("Deleted scenario %s", scenario_id)
