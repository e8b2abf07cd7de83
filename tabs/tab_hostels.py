"""Tab 3: Hostels — occupancy, fees and hostel revenue."""

import streamlit as st
import pandas as pd

from data.session_store import dispatch, get_result, get_state
from models.patch import HostelPatch
from engine.state_reducer import apply_hostel_patch
from engine.report import build_hostel_table
from components.charts import hostel_revenue_bar
from components.metrics_cards import render_metric_row, revenue_metric
from components.tables import render_utilization_table

# Editable hostel columns -> HostelData fields
HOSTEL_COLUMNS = {
    "Occupancy": "current_occupancy",
    "Max Capacity": "max_capacity",
    "Fee per Student": "fee_per_student",
    "Last Year Fee": "last_year_fee_per_student",
}


def render(sidebar_state):
    """Render the Hostels tab."""
    st.header("Hostels")

    state = get_state()
    result = get_result()
    if not state.hostels:
        st.info("No hostels in this scenario.")
        return

    totals = result.totals
    render_metric_row([
        revenue_metric("Hostel Revenue", totals.current_hostel_revenue, totals.projected_hostel_revenue),
        {"label": "Boarders", "value": f"{totals.hostel_students:,}",
         "delta": "Occupancy held constant", "delta_color": "off"},
        {"label": "Beds Available", "value": f"{sum(h.available_beds for h in result.hostels):,}"},
    ])

    st.caption("Hostel revenue is occupancy x fee per student. No growth or discount applies.")
    render_utilization_table(build_hostel_table(result))
    st.plotly_chart(hostel_revenue_bar(result.hostels), use_container_width=True)

    st.divider()

    st.subheader("Edit Hostels")
    editor_df = pd.DataFrame([{
        "Hostel ID": h.hostel_id,
        "Hostel": h.name,
        "Occupancy": h.current_occupancy,
        "Max Capacity": h.max_capacity,
        "Fee per Student": h.fee_per_student,
        "Last Year Fee": h.last_year_fee_per_student,
    } for h in state.hostels])

    edited = st.data_editor(
        editor_df,
        disabled=["Hostel ID", "Hostel"],
        use_container_width=True,
        key="w_hostels",
        num_rows="fixed",
    )

    if st.button("Save Hostel Changes", key="btn_save_hostels"):
        changed = 0
        try:
            for i, h in enumerate(state.hostels):
                updates = {}
                for column, field_name in HOSTEL_COLUMNS.items():
                    value = edited.iloc[i][column]
                    if pd.isna(value):
                        continue
                    value = int(value) if field_name in ("current_occupancy", "max_capacity") else float(value)
                    if value != getattr(h, field_name):
                        updates[field_name] = value
                if updates:
                    dispatch(apply_hostel_patch, h.hostel_id, HostelPatch(**updates))
                    changed += 1
        except ValueError as e:
            st.error(f"Could not update hostels: {e}")
        else:
            if changed:
                st.success(f"{changed} hostel(s) updated.")
                st.rerun()
            else:
                st.info("No changes detected.")
