"""Tab 5: Scenarios & Export — data upload, saved scenarios, comparison, downloads."""

import logging
import streamlit as st
import pandas as pd
from datetime import datetime

from data.loader import (
    load_file, load_multi_sheet_excel, parse_campuses, parse_hostels, parse_settings,
)
from data.validator import (
    validate_campuses, validate_classes, validate_hostels, validate_settings, validate_cross_file,
)
from data.session_store import (
    get_active_saved_id, get_result, get_scenario_store, get_state, replace_state, set_active_saved_id,
)
from data.scenario_store import ScenarioNotFoundError
from data.exporter import export_csv, export_excel, export_pdf
from data.serializer import state_from_json, state_to_json
from models.state import SimulationState
from engine.scenario_engine import compare_scenarios, run_simulation
from components.charts import scenario_comparison_bar
from components.tables import render_comparison_table

logger = logging.getLogger(__name__)


def _load_and_validate(campus_df, class_df, hostel_df=None, settings_df=None, source="Upload"):
    """Validate uploaded frames and, if clean, replace the current state."""
    errors = []
    warnings = []

    results = [validate_campuses(campus_df), validate_classes(class_df)]
    if hostel_df is not None:
        results.append(validate_hostels(hostel_df))
    if settings_df is not None:
        results.append(validate_settings(settings_df))

    for r in results:
        errors.extend(r.errors)
        warnings.extend(r.warnings)

    if not errors:
        cross = validate_cross_file(campus_df, class_df)
        warnings.extend(cross.warnings)

    if errors:
        for e in errors:
            st.error(e)
        return False

    for w in warnings:
        st.warning(w)

    current = get_state()
    state = SimulationState(
        campuses=parse_campuses(campus_df, class_df),
        hostels=parse_hostels(hostel_df) if hostel_df is not None else current.hostels,
        settings=parse_settings(settings_df, base=current.settings) if settings_df is not None else current.settings,
    )
    replace_state(state, source=source)
    set_active_saved_id(None)

    st.success(
        f"Data loaded: {len(state.campuses)} campuses, "
        f"{sum(len(c.classes) for c in state.campuses)} classes, {len(state.hostels)} hostels"
    )
    return True


def _render_upload():
    st.subheader("Data Upload")

    upload_mode = st.radio(
        "Upload mode",
        ["Single Excel file", "Separate files"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Single Excel file":
        st.caption(
            "Upload one `.xlsx` file with sheets named **Campuses** and **Classes**, "
            "plus optional **Hostels** and **Settings** sheets. Settings rows such as "
            "`Custom: Sports (School/Hostel)` declare custom fees."
        )
        single_file = st.file_uploader("Excel workbook", type=["xlsx"], key="upload_single")
        if st.button("Upload & Validate", type="primary", key="btn_upload_single"):
            if single_file:
                try:
                    campus_df, class_df, hostel_df, settings_df = load_multi_sheet_excel(single_file)
                    _load_and_validate(campus_df, class_df, hostel_df, settings_df, source=single_file.name)
                except Exception as e:
                    logger.exception("Failed to load %s", single_file.name)
                    st.error(f"Error loading file: {e}")
            else:
                st.warning("Please upload an Excel file.")
    else:
        col1, col2, col3 = st.columns(3)
        with col1:
            campus_file = st.file_uploader("Campuses", type=["csv", "xlsx"], key="upload_campuses")
        with col2:
            class_file = st.file_uploader("Classes", type=["csv", "xlsx"], key="upload_classes")
        with col3:
            hostel_file = st.file_uploader("Hostels (optional)", type=["csv", "xlsx"], key="upload_hostels")

        if st.button("Upload & Validate", type="primary", key="btn_upload_multi"):
            if campus_file and class_file:
                try:
                    _load_and_validate(
                        load_file(campus_file),
                        load_file(class_file),
                        load_file(hostel_file) if hostel_file else None,
                        source=campus_file.name,
                    )
                except Exception as e:
                    logger.exception("Failed to load uploaded files")
                    st.error(f"Error loading files: {e}")
            else:
                st.warning("Please upload both the campus and class files.")


def _render_saved_scenarios():
    store = get_scenario_store()
    st.subheader("Saved Scenarios")

    with st.form("save_scenario", clear_on_submit=True):
        name = st.text_input("Scenario name")
        description = st.text_area("Description", height=68)
        if st.form_submit_button("Save Current Scenario"):
            try:
                saved = store.create(name, get_state(), description)
                set_active_saved_id(saved.scenario_id)
                st.success(f"Saved '{saved.name}'.")
            except ValueError as e:
                st.error(str(e))

    saved = store.list()
    if not saved:
        st.caption("No saved scenarios yet.")
        return

    listing = pd.DataFrame([{
        "Name": s.name,
        "Description": s.description,
        "Campuses": len(s.state.campuses),
        "Created": s.created_at.strftime("%Y-%m-%d %H:%M"),
        "Updated": s.updated_at.strftime("%Y-%m-%d %H:%M"),
    } for s in saved])
    st.dataframe(listing, use_container_width=True, hide_index=True)

    ids = [s.scenario_id for s in saved]
    names = {s.scenario_id: s.name for s in saved}
    active = get_active_saved_id()
    selected = st.selectbox(
        "Saved scenario",
        options=ids,
        format_func=lambda x: names.get(x, x),
        index=ids.index(active) if active in ids else 0,
        key="saved_scenario_select",
    )

    col_load, col_update, col_delete = st.columns(3)
    with col_load:
        if st.button("Load", key="btn_load_saved", use_container_width=True):
            try:
                scenario = store.get(selected)
            except ScenarioNotFoundError:
                st.error("That scenario no longer exists.")
            else:
                replace_state(scenario.state, source=f"Saved: {scenario.name}")
                set_active_saved_id(scenario.scenario_id)
                st.rerun()
    with col_update:
        if st.button("Overwrite with current", key="btn_update_saved", use_container_width=True):
            try:
                store.update(selected, state=get_state())
                st.success(f"Updated '{names[selected]}'.")
            except ScenarioNotFoundError:
                st.error("That scenario no longer exists.")
    with col_delete:
        if st.button("Delete", key="btn_delete_saved", use_container_width=True):
            try:
                store.delete(selected)
            except ScenarioNotFoundError:
                st.error("That scenario no longer exists.")
            else:
                if active == selected:
                    set_active_saved_id(None)
                st.rerun()

    st.divider()

    # --- Comparison ---
    st.subheader("Compare with Current")
    compare_id = st.selectbox(
        "Compare the current scenario against",
        options=ids,
        format_func=lambda x: names.get(x, x),
        key="compare_select",
    )
    if compare_id:
        try:
            baseline = store.get(compare_id)
        except ScenarioNotFoundError:
            st.error("That scenario no longer exists.")
            return
        diffs = compare_scenarios(
            run_simulation(baseline.state), get_result(), name_a=baseline.name, name_b="Current",
        )
        diff_df = pd.DataFrame(diffs)
        render_comparison_table(diff_df)
        st.plotly_chart(scenario_comparison_bar(diff_df), use_container_width=True)


def _render_exports():
    st.subheader("Export")
    state = get_state()
    result = get_result()
    stamp = datetime.now().strftime("%Y%m%d_%H%M")

    col_csv, col_xlsx, col_pdf, col_json = st.columns(4)
    with col_csv:
        st.download_button(
            "Download CSV",
            export_csv(result, state.settings),
            f"revenue_forecast_{stamp}.csv",
            "text/csv",
            use_container_width=True,
        )
    with col_xlsx:
        st.download_button(
            "Download Excel",
            export_excel(result, state.settings),
            f"revenue_forecast_{stamp}.xlsx",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            use_container_width=True,
        )
    with col_pdf:
        st.download_button(
            "Download PDF",
            export_pdf(result, state.settings),
            f"revenue_forecast_{stamp}.pdf",
            "application/pdf",
            use_container_width=True,
        )
    with col_json:
        st.download_button(
            "Download Scenario (JSON)",
            state_to_json(state),
            f"scenario_{stamp}.json",
            "application/json",
            use_container_width=True,
        )

    json_file = st.file_uploader("Import scenario JSON", type=["json"], key="upload_json")
    if json_file and st.button("Import", key="btn_import_json"):
        try:
            imported = state_from_json(json_file.getvalue().decode("utf-8"))
        except ValueError as e:
            st.error(f"Invalid scenario file: {e}")
        else:
            replace_state(imported, source=json_file.name)
            set_active_saved_id(None)
            st.rerun()


def render(sidebar_state):
    """Render the Scenarios & Export tab."""
    st.header("Scenarios & Export")

    _render_upload()
    st.divider()
    _render_saved_scenarios()
    st.divider()
    _render_exports()
