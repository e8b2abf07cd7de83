"""Global sidebar controls for the scenario parameters."""

import streamlit as st
from dataclasses import dataclass
from models.patch import SettingsPatch
from engine.state_reducer import apply_global_discount, apply_settings_patch
from data.session_store import (
    dispatch, get_active_saved_id, get_data_source, get_last_edit, get_scenario_store, get_state,
    reset_to_defaults,
)
from data.scenario_store import ScenarioNotFoundError
from config.defaults import (
    RATE_SLIDER_MIN, RATE_SLIDER_MAX, DISCOUNT_SLIDER_MIN, DISCOUNT_SLIDER_MAX,
)


@dataclass
class SidebarState:
    show_inactive_classes: bool
    compact_currency: bool


def _rate_slider(label: str, value: float, key: str, help_text: str = "") -> float:
    return st.slider(
        label,
        min_value=float(min(RATE_SLIDER_MIN, value)),
        max_value=float(max(RATE_SLIDER_MAX, value)),
        value=float(value),
        step=0.5,
        format="%.1f%%",
        key=key,
        help=help_text or None,
    )


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    settings = get_state().settings
    with st.sidebar:
        st.title("School Revenue Forecaster")
        st.divider()

        st.subheader("Global Adjustments")
        changes = {
            "fee_hike": _rate_slider(
                "Fee Hike", settings.fee_hike, "w_sb_fee_hike",
                "Added to every campus's own fee hike."),
            "student_growth": _rate_slider(
                "Student Growth", settings.student_growth, "w_sb_student_growth",
                "Added to every campus's own growth rates."),
        }

        with st.expander("Per-population adjustments"):
            changes["renewal_fee_hike"] = _rate_slider(
                "Renewal Fee Hike", settings.renewal_fee_hike, "w_sb_renewal_fee_hike")
            changes["new_admission_fee_hike"] = _rate_slider(
                "New Admission Fee Hike", settings.new_admission_fee_hike, "w_sb_new_fee_hike")
            changes["renewal_growth"] = _rate_slider(
                "Renewal Growth", settings.renewal_growth, "w_sb_renewal_growth")
            changes["new_student_growth"] = _rate_slider(
                "New Student Growth", settings.new_student_growth, "w_sb_new_growth")

        changed = {k: v for k, v in changes.items() if v != getattr(settings, k)}
        if changed:
            dispatch(apply_settings_patch, SettingsPatch(**changed))
            st.rerun()

        st.divider()

        # Discount is pushed to every campus only on request
        discount = st.slider(
            "Global Discount",
            min_value=float(min(DISCOUNT_SLIDER_MIN, settings.global_discount)),
            max_value=float(max(DISCOUNT_SLIDER_MAX, settings.global_discount)),
            value=float(settings.global_discount),
            step=0.5,
            format="%.1f%%",
            key="w_sb_global_discount",
        )
        if st.button("Apply discount to all campuses", use_container_width=True):
            dispatch(apply_global_discount, discount)
            st.rerun()

        st.divider()

        show_inactive = st.checkbox("Show inactive classes", value=False, key="sb_show_inactive")
        compact = st.checkbox("Compact currency (K/M/B)", value=True, key="sb_compact_currency")

        if st.button("Reset to defaults", use_container_width=True):
            reset_to_defaults()
            st.rerun()

        st.divider()

        # Data status indicator
        st.caption(f"Data: {get_data_source()}")
        last_edit = get_last_edit()
        if last_edit is not None:
            st.caption(f"Last edit: {last_edit.strftime('%H:%M:%S')}")
        saved_id = get_active_saved_id()
        if saved_id:
            try:
                st.caption(f"Saved scenario: {get_scenario_store().get(saved_id).name}")
            except ScenarioNotFoundError:
                st.caption("Saved scenario: (deleted)")

    return SidebarState(
        show_inactive_classes=show_inactive,
        compact_currency=compact,
    )
