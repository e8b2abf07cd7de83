"""Tab 1: Executive Summary — headline revenue, growth and capacity health."""

import streamlit as st
import pandas as pd

from data.session_store import get_result, get_state
from components.metrics_cards import render_metric_row, revenue_metric, render_alert_card
from components.charts import revenue_comparison_bar, revenue_mix_donut
from components.formatting import format_currency, format_number, format_percent
from components.tables import render_styled_table
from engine.campus_engine import top_campuses, over_capacity_campuses
from engine.explainer import explain_fee_formula
from engine.report import build_executive_summary
from config.defaults import NEAR_CAPACITY_THRESHOLD


def render(sidebar_state):
    """Render the Executive Summary tab."""
    st.header("Executive Summary")

    result = get_result()
    totals = result.totals
    compact = sidebar_state.compact_currency

    if not result.campuses:
        st.info("No campuses loaded. Upload data in the Scenarios & Export tab.")
        return

    # --- KPI Metrics ---
    render_metric_row([
        revenue_metric("Grand Total", totals.current_grand_total, totals.projected_grand_total,
                       "Tuition + hostel + annual + DCP + admission + custom fees"),
        revenue_metric("Tuition Revenue", totals.current_tuition_revenue, totals.projected_tuition_revenue,
                       "Net school tuition plus hostel fees"),
        {"label": "Students", "value": format_number(totals.projected_school_students),
         "delta": f"{totals.projected_school_students - totals.current_school_students:+,} "
                  f"({format_percent(totals.student_growth_percent)})"},
        {"label": "Over Capacity", "value": f"{totals.over_capacity_count} / {totals.campus_count}",
         "delta": "campuses" if totals.over_capacity_count else "None",
         "delta_color": "inverse" if totals.over_capacity_count else "off"},
    ])

    render_metric_row([
        revenue_metric("Net School Tuition", totals.current_school_revenue, totals.projected_school_revenue),
        revenue_metric("Hostel Revenue", totals.current_hostel_revenue, totals.projected_hostel_revenue),
        revenue_metric("Additional Fees", totals.additional_fees.current_total,
                       totals.additional_fees.projected_total),
        {"label": "Discount Given", "value": format_currency(totals.projected_discount_amount),
         "delta": f"avg {totals.average_projected_discount_rate:.1f}% "
                  f"(last year {totals.average_current_discount_rate:.1f}%)",
         "delta_color": "off"},
    ])

    st.divider()

    # --- Charts ---
    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(revenue_comparison_bar(result.campuses), use_container_width=True)
    with col2:
        st.plotly_chart(revenue_mix_donut(totals), use_container_width=True)

    st.divider()

    # --- Top campuses and alerts ---
    col_top, col_alerts = st.columns([3, 2])

    with col_top:
        st.subheader("Top Campuses by Projected Revenue")
        top_rows = [{
            "Rank": i + 1,
            "Campus": c.campus_name,
            "Students": c.projected_total_students,
            "Projected Revenue": format_currency(c.projected_net_revenue, compact),
            "Change": format_percent(c.revenue_change_percent),
        } for i, c in enumerate(top_campuses(result.campuses))]
        st.dataframe(pd.DataFrame(top_rows), use_container_width=True, hide_index=True)

    with col_alerts:
        st.subheader("Capacity Alerts")
        over = [c for c in over_capacity_campuses(result.campuses) if c.capacity_defined]
        near = [
            c for c in result.campuses
            if c.capacity_defined and not c.is_over_capacity and c.capacity_utilization >= NEAR_CAPACITY_THRESHOLD
        ]
        undefined = [c for c in result.campuses if not c.capacity_defined]

        for c in over:
            render_alert_card(
                f"{c.campus_name}: {c.projected_total_students:,} projected students "
                f"vs capacity {c.max_capacity:,} ({c.capacity_utilization:.0f}%)",
                level="error",
            )
        for c in near:
            render_alert_card(
                f"{c.campus_name}: near capacity at {c.capacity_utilization:.0f}%",
                level="warning",
            )
        for c in undefined:
            render_alert_card(f"{c.campus_name}: no capacity set", level="info")
        if not (over or near or undefined):
            st.success("All campuses are within capacity.")

    st.divider()

    render_styled_table(
        build_executive_summary(result),
        title="Current vs Projected",
        money_columns=["Current", "Projected", "Change"],
    )

    with st.expander("How is revenue calculated?"):
        for step in explain_fee_formula(get_state().settings):
            st.markdown(f"- {step}")
        st.caption(
            "Each campus adds its own fee hike and growth rates to the global adjustments. "
            "Discounts apply to tuition only; annual, DCP, admission and custom fees are never discounted."
        )
