"""Reusable KPI metric card widgets."""

import streamlit as st

from components.formatting import format_currency, format_percent

ALERT_ICONS = {"error": "🔴", "warning": "🟡", "info": "🔵"}


def render_metric_row(metrics: list[dict]):
    """Render metric cards side by side.

    Each dict needs label and value; delta, delta_color and help are optional.
    """
    for col, m in zip(st.columns(len(metrics)), metrics):
        col.metric(
            label=m["label"],
            value=m["value"],
            delta=m.get("delta"),
            delta_color=m.get("delta_color", "normal"),
            help=m.get("help"),
        )


def revenue_metric(label: str, current: float, projected: float, help_text: str = None) -> dict:
    """Metric dict showing the projected amount with its change against current."""
    change = projected - current
    pct = (change / current * 100) if current else 0.0
    return {
        "label": label,
        "value": format_currency(projected),
        "delta": f"{format_currency(change)} ({format_percent(pct)})",
        "help": help_text or f"Current: {format_currency(current, compact=False)}",
    }


def render_alert_card(message: str, level: str = "warning"):
    """Error, warning or info banner; unknown levels render as info."""
    render = {"error": st.error, "warning": st.warning}.get(level, st.info)
    render(message, icon=ALERT_ICONS.get(level, ALERT_ICONS["info"]))
