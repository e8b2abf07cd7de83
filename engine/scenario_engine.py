"""Scenario simulation engine: normalize state, recompute everything, compare."""

from typing import List

from models.state import SimulationState
from models.calculation import SimulationResult
from engine.normalizer import normalize_state
from engine.campus_engine import calculate_all_campuses
from engine.hostel_engine import calculate_all_hostels
from engine.totals_engine import calculate_totals


def run_simulation(state: SimulationState) -> SimulationResult:
    """Run the full projection for a state. Pure: same state, same result."""
    state = normalize_state(state)
    campus_calcs = calculate_all_campuses(state.campuses, state.settings)
    hostel_calcs = calculate_all_hostels(state.hostels)
    totals = calculate_totals(campus_calcs, hostel_calcs, state.settings)
    return SimulationResult(campuses=campus_calcs, hostels=hostel_calcs, totals=totals)


def compare_scenarios(
    result_a: SimulationResult,
    result_b: SimulationResult,
    name_a: str = "A",
    name_b: str = "B",
) -> List[dict]:
    """Compare two simulation results and return per-campus differences."""
    a_map = {c.campus_id: c for c in result_a.campuses}
    b_map = {c.campus_id: c for c in result_b.campuses}

    all_ids = sorted(set(list(a_map.keys()) + list(b_map.keys())))
    diffs = []
    for campus_id in all_ids:
        a = a_map.get(campus_id)
        b = b_map.get(campus_id)
        label = (b or a).short_name
        a_revenue = a.projected_net_revenue if a else 0
        b_revenue = b.projected_net_revenue if b else 0
        diffs.append({
            "Campus": label,
            f"{name_a} Students": a.projected_total_students if a else 0,
            f"{name_b} Students": b.projected_total_students if b else 0,
            "Student Change": (b.projected_total_students if b else 0) - (a.projected_total_students if a else 0),
            f"{name_a} Revenue": a_revenue,
            f"{name_b} Revenue": b_revenue,
            "Revenue Change": b_revenue - a_revenue,
        })

    ta, tb = result_a.totals, result_b.totals
    diffs.append({
        "Campus": "ALL CAMPUSES",
        f"{name_a} Students": ta.projected_school_students,
        f"{name_b} Students": tb.projected_school_students,
        "Student Change": tb.projected_school_students - ta.projected_school_students,
        f"{name_a} Revenue": ta.projected_school_revenue,
        f"{name_b} Revenue": tb.projected_school_revenue,
        "Revenue Change": tb.projected_school_revenue - ta.projected_school_revenue,
    })
    return diffs
