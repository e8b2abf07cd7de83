"""Typed wrapper around st.session_state for application data."""

import logging
import streamlit as st
from typing import Callable, Optional
from datetime import datetime
from models.state import SimulationState
from models.calculation import SimulationResult
from engine.normalizer import normalize_state
from engine.scenario_engine import run_simulation
from engine.state_reducer import reset_state
from data.sample_data import generate_sample_state
from data.scenario_store import ScenarioStore

logger = logging.getLogger(__name__)


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "simulation_state": None,
        "active_saved_id": None,
        "selected_campus_id": None,
        "data_source": "Sample data",
        "last_edit": None,
        "scenario_store": None,
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    if st.session_state["simulation_state"] is None:
        st.session_state["simulation_state"] = generate_sample_state()
    if st.session_state["scenario_store"] is None:
        st.session_state["scenario_store"] = ScenarioStore()


# --- Getters ---

def get_state() -> SimulationState:
    return st.session_state["simulation_state"]


def get_result() -> SimulationResult:
    """Recompute every figure from the current inputs."""
    return run_simulation(get_state())


def get_active_saved_id() -> Optional[str]:
    return st.session_state.get("active_saved_id")


def get_selected_campus_id() -> Optional[str]:
    return st.session_state.get("selected_campus_id")


def get_data_source() -> str:
    return st.session_state.get("data_source", "Sample data")


def get_last_edit() -> Optional[datetime]:
    return st.session_state.get("last_edit")


def get_scenario_store() -> ScenarioStore:
    return st.session_state["scenario_store"]


# --- Setters ---

def set_state(state: SimulationState, source: Optional[str] = None):
    st.session_state["simulation_state"] = normalize_state(state)
    st.session_state["last_edit"] = datetime.now()
    if source is not None:
        st.session_state["data_source"] = source


def set_active_saved_id(scenario_id: Optional[str]):
    st.session_state["active_saved_id"] = scenario_id


def set_selected_campus_id(campus_id: Optional[str]):
    st.session_state["selected_campus_id"] = campus_id


# --- Updates ---

def dispatch(reducer: Callable[..., SimulationState], *args, **kwargs) -> SimulationState:
    """Replace the current state with reducer(state, *args, **kwargs).

    Reducer errors propagate unchanged and leave the state untouched.
    """
    new_state = reducer(get_state(), *args, **kwargs)
    set_state(new_state)
    logger.debug("Applied %s", reducer.__name__)
    return new_state


def reset_to_defaults():
    replace_state(reset_state(generate_sample_state()), source="Sample data")
    set_active_saved_id(None)
    logger.info("Reset scenario to sample defaults")


# Editor widgets are keyed with this prefix so a wholesale state swap can
# drop their cached values and re-seed them from the new state.
WIDGET_KEY_PREFIX = "w_"


def replace_state(state: SimulationState, source: str):
    """Swap in a whole new state (upload, saved scenario, reset)."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(WIDGET_KEY_PREFIX)]:
        del st.session_state[key]
    set_state(state, source=source)
