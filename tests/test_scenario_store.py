"""Tests for saved scenario persistence."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from dataclasses import replace

from models.campus import CampusData, ClassData
from models.settings import GlobalSettings
from models.state import SimulationState
from data.scenario_store import ScenarioNotFoundError, ScenarioStore


def make_state(fee_hike=0):
    return SimulationState(
        campuses=[CampusData("C1", "Campus One", "ONE", 120, discount_rate=10,
                             classes=[ClassData("Grade 5", 70, 300000, 30, 350000)])],
        settings=GlobalSettings(fee_hike=fee_hike),
    )


@pytest.fixture
def store(tmp_path):
    return ScenarioStore(str(tmp_path / "scenarios"))


class TestScenarioStore:
    def test_create_and_get(self, store):
        saved = store.create("  Base case ", make_state(), description="FY budget")
        loaded = store.get(saved.scenario_id)

        assert loaded.name == "Base case"
        assert loaded.description == "FY budget"
        assert loaded.created_at == saved.created_at
        assert loaded.state.campuses[0].discount_rate == 10
        assert loaded.state.campuses[0].last_year_discount == 10

    def test_empty_name_rejected(self, store):
        with pytest.raises(ValueError):
            store.create("   ", make_state())

    def test_get_unknown(self, store):
        with pytest.raises(ScenarioNotFoundError):
            store.get("missing")

    def test_list_most_recent_first(self, store):
        first = store.create("First", make_state())
        store.create("Second", make_state())
        store.update(first.scenario_id, name="First (edited)")

        assert [s.name for s in store.list()] == ["First (edited)", "Second"]

    def test_update_state_keeps_identity(self, store):
        saved = store.create("Hike", make_state())
        updated = store.update(saved.scenario_id, state=make_state(fee_hike=7))

        assert updated.scenario_id == saved.scenario_id
        assert updated.created_at == saved.created_at
        assert updated.updated_at >= saved.updated_at
        assert store.get(saved.scenario_id).state.settings.fee_hike == 7
        assert store.get(saved.scenario_id).name == "Hike"

    def test_update_unknown(self, store):
        with pytest.raises(ScenarioNotFoundError):
            store.update("missing", name="x")

    def test_delete(self, store):
        saved = store.create("Temp", make_state())
        store.delete(saved.scenario_id)
        assert store.list() == []
        with pytest.raises(ScenarioNotFoundError):
            store.delete(saved.scenario_id)

    def test_unreadable_files_skipped(self, store):
        store.create("Good", make_state())
        with open(os.path.join(store.directory, "broken.json"), "w") as f:
            f.write("{not json")
        with open(os.path.join(store.directory, "partial.json"), "w") as f:
            f.write('{"name": "no id"}')
        with open(os.path.join(store.directory, "array.json"), "w") as f:
            f.write("[]")
        with open(os.path.join(store.directory, "bad_state.json"), "w") as f:
            f.write('{"scenario_id": "x", "name": "Bad", "created_at": "2024-01-01T00:00:00", '
                    '"updated_at": "2024-01-01T00:00:00", "state": []}')

        assert [s.name for s in store.list()] == ["Good"]

    def test_saved_state_is_a_snapshot(self, store):
        state = make_state()
        saved = store.create("Snapshot", state)
        edited = replace(state, settings=GlobalSettings(fee_hike=20))

        assert edited.settings.fee_hike == 20
        assert store.get(saved.scenario_id).state.settings.fee_hike == 0


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
