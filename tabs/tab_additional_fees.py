"""Tab 4: Additional Fees — annual, DCP, admission and custom per-student fees."""

import streamlit as st
import pandas as pd

from data.session_store import dispatch, get_result, get_state
from models.patch import CustomFeePatch, SettingsPatch
from engine.state_reducer import (
    add_custom_fee, apply_custom_fee_patch, apply_settings_patch, remove_custom_fee,
)
from components.formatting import format_currency
from components.metrics_cards import render_metric_row, revenue_metric

# (label, forecast field, last-year field, who pays)
STANDARD_FEES = [
    ("School Annual Fee", "school_annual_fee", "last_year_school_annual_fee",
     "School students at campuses where the annual fee applies"),
    ("Hostel Annual Fee", "hostel_annual_fee", "last_year_hostel_annual_fee", "Every hostel student"),
    ("School DCP", "school_dcp", "last_year_school_dcp", "Every school student"),
    ("Admission Fee", "admission_fee", "last_year_admission_fee", "New admissions only"),
]


def _render_standard_fees(settings):
    st.subheader("Standard Fees (per student)")
    st.caption("These fees are never discounted. Last-year amounts drive the current-year figures.")

    values = {}
    for label, field_name, last_field, payers in STANDARD_FEES:
        col_label, col_now, col_last = st.columns([2, 1, 1])
        with col_label:
            st.markdown(f"**{label}**")
            st.caption(payers)
        with col_now:
            values[field_name] = st.number_input(
                "Forecast", value=float(getattr(settings, field_name)), step=500.0, min_value=0.0,
                key=f"w_fee_{field_name}",
            )
        with col_last:
            values[last_field] = st.number_input(
                "Last Year", value=float(getattr(settings, last_field)), step=500.0, min_value=0.0,
                key=f"w_fee_{last_field}",
            )

    changed = {k: v for k, v in values.items() if v != getattr(settings, k)}
    if st.button("Save Fees", key="btn_save_fees"):
        if not changed:
            st.info("No changes detected.")
            return
        try:
            dispatch(apply_settings_patch, SettingsPatch(**changed))
            st.success("Fees updated.")
            st.rerun()
        except ValueError as e:
            st.error(f"Could not update fees: {e}")


def _render_custom_fees(settings):
    st.subheader("Custom Fees")

    if settings.custom_fees:
        editor_df = pd.DataFrame([{
            "ID": f.fee_id,
            "Name": f.name,
            "Amount": f.amount,
            "Last Year": f.last_year_amount,
            "School": f.applies_to_school,
            "Hostel": f.applies_to_hostel,
            "Remove": False,
        } for f in settings.custom_fees])
        edited = st.data_editor(
            editor_df,
            disabled=["ID"],
            use_container_width=True,
            hide_index=True,
            key="w_custom_fees",
            num_rows="fixed",
        )
        if st.button("Save Custom Fees", key="btn_save_custom_fees"):
            try:
                for i, fee in enumerate(settings.custom_fees):
                    row = edited.iloc[i]
                    if bool(row["Remove"]):
                        dispatch(remove_custom_fee, fee.fee_id)
                        continue
                    patch = CustomFeePatch(
                        name=str(row["Name"]),
                        amount=float(row["Amount"]),
                        last_year_amount=None if pd.isna(row["Last Year"]) else float(row["Last Year"]),
                        applies_to_school=bool(row["School"]),
                        applies_to_hostel=bool(row["Hostel"]),
                    )
                    dispatch(apply_custom_fee_patch, fee.fee_id, patch)
                st.success("Custom fees updated.")
                st.rerun()
            except ValueError as e:
                st.error(f"Could not update custom fees: {e}")
    else:
        st.caption("No custom fees yet.")

    with st.form("add_custom_fee", clear_on_submit=True):
        st.markdown("**Add a custom fee**")
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name", placeholder="e.g. Sports Fee")
            amount = st.number_input("Amount per student", min_value=0.0, step=500.0)
        with col2:
            applies_school = st.checkbox("Charge school students", value=True)
            applies_hostel = st.checkbox("Charge hostel students", value=False)
        if st.form_submit_button("Add Fee"):
            try:
                dispatch(add_custom_fee, name.strip(), amount, applies_school, applies_hostel)
                st.success(f"Added '{name.strip()}'.")
                st.rerun()
            except ValueError as e:
                st.error(f"Could not add fee: {e}")


def render(sidebar_state):
    """Render the Additional Fees tab."""
    st.header("Additional Fees")

    state = get_state()
    result = get_result()
    fees = result.totals.additional_fees
    compact = sidebar_state.compact_currency

    render_metric_row([
        revenue_metric("Additional Fees", fees.current_total, fees.projected_total),
        revenue_metric("Annual Fees", fees.current_annual_fee_total, fees.projected_annual_fee_total),
        revenue_metric("DCP", fees.current_dcp_total, fees.projected_dcp_total),
        revenue_metric("Admission Fees", fees.current_admission_fee_total, fees.projected_admission_fee_total),
    ])

    rows = [
        ("School Annual Fee", fees.current_school_annual_fee, fees.projected_school_annual_fee),
        ("Hostel Annual Fee", fees.current_hostel_annual_fee, fees.projected_hostel_annual_fee),
        ("DCP", fees.current_dcp_total, fees.projected_dcp_total),
        ("Admission Fee", fees.current_admission_fee_total, fees.projected_admission_fee_total),
    ]
    rows += [(f"{c.name} (custom)", c.current_total, c.projected_total) for c in fees.custom_fees]
    rows.append(("Total", fees.current_total, fees.projected_total))
    st.dataframe(pd.DataFrame([{
        "Fee": label,
        "Current": format_currency(current, compact),
        "Projected": format_currency(projected, compact),
        "Change": format_currency(projected - current, compact),
    } for label, current, projected in rows]), use_container_width=True, hide_index=True)

    st.divider()
    _render_standard_fees(state.settings)
    st.divider()
    _render_custom_fees(state.settings)
