"""Tab 2: Campuses — per-campus parameters, class breakdown and fee lines."""

import streamlit as st
import pandas as pd

from data.session_store import (
    dispatch, get_result, get_selected_campus_id, get_state, set_selected_campus_id,
)
from models.patch import CampusPatch, ClassPatch
from engine.state_reducer import apply_campus_patch, apply_class_patch
from engine.fees_engine import calculate_campus_fee_breakdown
from engine.explainer import explain_campus_projection
from engine.report import build_campus_overview
from components.charts import capacity_utilization_bar
from components.formatting import format_currency, format_percent
from components.metrics_cards import render_metric_row, revenue_metric
from components.tables import render_utilization_table

# Editable class columns -> ClassData fields
CLASS_COLUMNS = {
    "Renewal Students": "renewal_count",
    "Renewal Fee": "renewal_fee",
    "New Students": "new_admission_count",
    "New Admission Fee": "new_admission_fee",
    "Forecast Renewal": "forecast_renewal_count",
    "Forecast New": "forecast_new_admission_count",
}
FORECAST_FIELDS = ("forecast_renewal_count", "forecast_new_admission_count")


def _class_editor_df(campus) -> pd.DataFrame:
    return pd.DataFrame([{
        "Class": cls.class_name,
        "Renewal Students": cls.renewal_count,
        "Renewal Fee": cls.renewal_fee,
        "New Students": cls.new_admission_count,
        "New Admission Fee": cls.new_admission_fee,
        "Forecast Renewal": cls.forecast_renewal_count,
        "Forecast New": cls.forecast_new_admission_count,
    } for cls in campus.classes])


def _cell(value, as_int: bool):
    if value is None or pd.isna(value):
        return None
    return int(value) if as_int else float(value)


def _save_class_edits(campus, edited: pd.DataFrame) -> int:
    """Dispatch one ClassPatch per changed row; returns the number of rows changed."""
    changed_rows = 0
    for idx, cls in enumerate(campus.classes):
        row = edited.iloc[idx]
        desired = {f: _cell(row[col], f.endswith("count")) for col, f in CLASS_COLUMNS.items()}
        if all(value == getattr(cls, f) for f, value in desired.items()):
            continue
        # A blanked forecast cell clears the overrides; any still set is re-applied
        clear = any(desired[f] is None and getattr(cls, f) is not None for f in FORECAST_FIELDS)
        updates = {f: value for f, value in desired.items() if value is not None}
        dispatch(apply_class_patch, campus.campus_id, idx,
                 ClassPatch(clear_forecast_overrides=clear, **updates))
        changed_rows += 1
    return changed_rows


def _render_campus_settings(campus):
    st.subheader("Campus Parameters")
    st.caption("Campus rates are added to the global adjustments from the sidebar.")
    key = f"w_campus_{campus.campus_id}"

    col1, col2, col3 = st.columns(3)
    with col1:
        renewal_hike = st.number_input("Renewal Fee Hike (%)", value=float(campus.renewal_fee_hike),
                                       step=0.5, key=f"{key}_renewal_hike")
        new_hike = st.number_input("New Admission Fee Hike (%)", value=float(campus.new_admission_fee_hike),
                                   step=0.5, key=f"{key}_new_hike")
    with col2:
        renewal_growth = st.number_input("Renewal Growth (%)", value=float(campus.renewal_growth),
                                         step=0.5, key=f"{key}_renewal_growth")
        new_growth = st.number_input("New Student Growth (%)", value=float(campus.new_student_growth),
                                     step=0.5, key=f"{key}_new_growth")
    with col3:
        discount = st.number_input("Discount (%)", value=float(campus.discount_rate),
                                   step=0.5, key=f"{key}_discount")
        last_discount = st.number_input("Last Year Discount (%)", value=float(campus.last_year_discount),
                                        step=0.5, key=f"{key}_last_discount")

    col4, col5 = st.columns(2)
    with col4:
        capacity = st.number_input("Max Capacity", value=int(campus.max_capacity), step=10,
                                   key=f"{key}_capacity")
    with col5:
        annual = st.checkbox("Annual fee applies", value=campus.annual_fee_applicable,
                             key=f"{key}_annual")

    if st.button("Save Campus Parameters", key=f"btn_save_campus_{campus.campus_id}"):
        patch = CampusPatch(
            renewal_fee_hike=renewal_hike,
            new_admission_fee_hike=new_hike,
            renewal_growth=renewal_growth,
            new_student_growth=new_growth,
            discount_rate=discount,
            last_year_discount=last_discount,
            max_capacity=int(capacity),
            annual_fee_applicable=annual,
        )
        try:
            dispatch(apply_campus_patch, campus.campus_id, patch)
            st.success(f"{campus.short_name} updated.")
            st.rerun()
        except ValueError as e:
            st.error(f"Could not update campus: {e}")


def render(sidebar_state):
    """Render the Campuses tab."""
    st.header("Campuses")

    state = get_state()
    result = get_result()
    if not state.campuses:
        st.info("No campuses loaded. Upload data in the Scenarios & Export tab.")
        return

    compact = sidebar_state.compact_currency

    # --- Overview ---
    st.subheader("Campus Overview")
    overview = build_campus_overview(result)
    display = overview[[
        "Campus", "Current Students", "Projected Students", "Max Capacity", "Utilization (%)",
        "Discount (%)", "Current Net", "Projected Net", "Revenue Change (%)",
    ]].copy()
    for col in ("Current Net", "Projected Net"):
        display[col] = display[col].map(lambda v: format_currency(v, compact))
    render_utilization_table(display)
    st.plotly_chart(capacity_utilization_bar(result.campuses), use_container_width=True)

    st.divider()

    # --- Campus Detail ---
    campus_ids = [c.campus_id for c in state.campuses]
    names = {c.campus_id: c.name for c in state.campuses}
    current_id = get_selected_campus_id()
    selected_idx = campus_ids.index(current_id) if current_id in campus_ids else 0
    selected_id = st.selectbox(
        "Campus",
        options=campus_ids,
        format_func=lambda x: names.get(x, x),
        index=selected_idx,
        key="campus_selector",
    )
    if selected_id != current_id:
        set_selected_campus_id(selected_id)

    campus = state.find_campus(selected_id)
    calc = next(c for c in result.campuses if c.campus_id == selected_id)

    render_metric_row([
        revenue_metric("Net Revenue", calc.current_net_revenue, calc.projected_net_revenue),
        revenue_metric("Gross Revenue", calc.current_gross_revenue, calc.projected_gross_revenue),
        {"label": "Students", "value": f"{calc.projected_total_students:,}",
         "delta": f"{calc.projected_total_students - calc.current_total_students:+,}"},
        {"label": "Utilization",
         "value": f"{calc.capacity_utilization:.0f}%" if calc.capacity_defined else "n/a",
         "delta": "Over capacity" if calc.is_over_capacity else None,
         "delta_color": "inverse"},
    ])

    _render_campus_settings(campus)

    st.divider()

    # --- Classes ---
    st.subheader("Class Data")
    st.caption(
        "Forecast columns override the growth formula for that class; leave blank to use it. "
        "Classes with no students and no renewal fee are inactive."
    )
    edited = st.data_editor(
        _class_editor_df(campus),
        disabled=["Class"],
        use_container_width=True,
        key=f"w_classes_{campus.campus_id}",
        num_rows="fixed",
    )
    if st.button("Save Class Changes", key=f"btn_save_classes_{campus.campus_id}"):
        try:
            count = _save_class_edits(campus, edited)
        except ValueError as e:
            st.error(f"Could not update classes: {e}")
        else:
            if count:
                st.success(f"{count} class(es) updated.")
                st.rerun()
            else:
                st.info("No changes detected.")

    classes = calc.classes if sidebar_state.show_inactive_classes else calc.active_classes
    class_rows = [{
        "Class": cls.class_name,
        "Students": f"{cls.current_total_students} -> {cls.projected_total_students}",
        "Renewal Fee": f"{cls.renewal.current_fee:,.0f} -> {cls.renewal.projected_fee:,.0f}",
        "New Fee": f"{cls.new_admission.current_fee:,.0f} -> {cls.new_admission.projected_fee:,.0f}",
        "Current Revenue": format_currency(cls.current_revenue, compact),
        "Projected Revenue": format_currency(cls.projected_revenue, compact),
        "Change": format_percent(cls.revenue_change_percent),
        "Override": "Yes" if cls.renewal.is_overridden or cls.new_admission.is_overridden else "",
        "Active": "Yes" if cls.is_active else "No",
    } for cls in classes]
    st.dataframe(pd.DataFrame(class_rows), use_container_width=True, hide_index=True)

    st.divider()

    # --- Fee breakdown and explanation ---
    col_fees, col_explain = st.columns(2)
    with col_fees:
        st.subheader("Fee Breakdown")
        breakdown = calculate_campus_fee_breakdown(calc, state.settings)
        fee_rows = [{
            "Fee": line.label,
            "Current": format_currency(line.current, compact),
            "Projected": format_currency(line.projected, compact),
            "Change": format_currency(line.change, compact),
        } for line in breakdown.lines]
        fee_rows.append({
            "Fee": "Grand Total",
            "Current": format_currency(breakdown.current_grand_total, compact),
            "Projected": format_currency(breakdown.projected_grand_total, compact),
            "Change": f"{format_currency(breakdown.grand_total_change, compact)} "
                      f"({format_percent(breakdown.grand_total_change_percent)})",
        })
        st.dataframe(pd.DataFrame(fee_rows), use_container_width=True, hide_index=True)

    with col_explain:
        st.subheader("How this forecast was built")
        with st.expander("Show calculation steps", expanded=False):
            for step in explain_campus_projection(calc):
                st.text(step)
