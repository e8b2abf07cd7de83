"""Plotly chart builders for the School Revenue Forecaster."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List

from models.calculation import CampusCalculation, HostelCalculation, TotalCalculation
from config.defaults import NEAR_CAPACITY_THRESHOLD

CURRENT_COLOR = "#4A90D9"
PROJECTED_COLOR = "#E8734A"


def revenue_comparison_bar(
    campuses: List[CampusCalculation],
    title: str = "Current vs Projected Net Revenue by Campus",
) -> go.Figure:
    """Grouped bar of current and projected net tuition per campus."""
    df = pd.DataFrame([
        {"campus": c.short_name, "Current": c.current_net_revenue, "Projected": c.projected_net_revenue}
        for c in campuses
    ])
    fig = px.bar(
        df, x="campus", y=["Current", "Projected"],
        barmode="group",
        labels={"value": "Net Revenue", "campus": "Campus", "variable": ""},
        title=title,
        color_discrete_map={"Current": CURRENT_COLOR, "Projected": PROJECTED_COLOR},
    )
    fig.update_layout(legend_title_text="", height=400)
    return fig


def revenue_mix_donut(totals: TotalCalculation, title: str = "Projected Revenue Mix") -> go.Figure:
    """Donut of projected grand total by revenue stream."""
    fees = totals.additional_fees
    labels = ["School Tuition", "Hostel", "Annual Fees", "DCP", "Admission Fees", "Custom Fees"]
    values = [
        totals.projected_school_revenue,
        totals.projected_hostel_revenue,
        fees.projected_annual_fee_total,
        fees.projected_dcp_total,
        fees.projected_admission_fee_total,
        fees.projected_custom_fee_total,
    ]
    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=values,
        hole=0.6,
        textinfo="percent+label",
    )])
    fig.update_layout(title=title, height=380, showlegend=True)
    return fig


def capacity_utilization_bar(campuses: List[CampusCalculation]) -> go.Figure:
    """Horizontal bar of projected utilization; campuses without capacity are skipped."""
    rows = [
        {"campus": c.short_name, "utilization": c.capacity_utilization}
        for c in campuses if c.capacity_defined
    ]
    df = pd.DataFrame(rows, columns=["campus", "utilization"]).sort_values("utilization")
    fig = px.bar(
        df, x="utilization", y="campus",
        orientation="h",
        title="Projected Capacity Utilization",
        labels={"utilization": "Utilization %", "campus": "Campus"},
        color="utilization",
        color_continuous_scale=[CURRENT_COLOR, "#F5C542", PROJECTED_COLOR],
        range_color=[0, 120],
    )
    fig.add_vline(x=NEAR_CAPACITY_THRESHOLD, line_dash="dot", line_color="#F5C542")
    fig.add_vline(x=100, line_dash="dash", line_color="#cc0000")
    fig.update_layout(height=max(300, len(df) * 40), yaxis_type="category")
    fig.update_traces(texttemplate="%{x:.0f}%", textposition="auto")
    return fig


def hostel_revenue_bar(hostels: List[HostelCalculation]) -> go.Figure:
    fig = go.Figure()
    names = [h.hostel_name for h in hostels]
    fig.add_trace(go.Bar(name="Current", x=names, y=[h.current_revenue for h in hostels],
                         marker_color=CURRENT_COLOR))
    fig.add_trace(go.Bar(name="Projected", x=names, y=[h.projected_revenue for h in hostels],
                         marker_color=PROJECTED_COLOR))
    fig.update_layout(barmode="group", title="Hostel Revenue", yaxis_title="Revenue", height=350)
    return fig


def scenario_comparison_bar(comparison_df: pd.DataFrame) -> go.Figure:
    """Bar chart comparing projected revenue across two scenarios."""
    fig = go.Figure()

    df = comparison_df[comparison_df["Campus"] != "ALL CAMPUSES"]
    cols = [c for c in df.columns if "Revenue" in c and "Change" not in c]
    colors = [CURRENT_COLOR, PROJECTED_COLOR]

    for i, col in enumerate(cols[:2]):
        fig.add_trace(go.Bar(
            name=col,
            x=df["Campus"],
            y=df[col],
            marker_color=colors[i % 2],
        ))

    fig.update_layout(
        barmode="group",
        title="Scenario Revenue Comparison",
        xaxis_title="Campus",
        yaxis_title="Projected Net Revenue",
        height=400,
    )
    return fig
