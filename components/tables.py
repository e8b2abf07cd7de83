"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import List, Optional

from config.defaults import NEAR_CAPACITY_THRESHOLD


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    use_container_width: bool = True,
    money_columns: Optional[List[str]] = None,
):
    """Render a styled, non-editable dataframe; money columns get separators."""
    if title:
        st.subheader(title)
    if money_columns:
        present = [c for c in money_columns if c in df.columns]
        styled = df.style.format({c: "{:,.0f}" for c in present})
        st.dataframe(styled, height=height, use_container_width=use_container_width)
    else:
        st.dataframe(df, height=height, use_container_width=use_container_width)


def render_utilization_table(df: pd.DataFrame, utilization_column: str = "Utilization (%)"):
    """Render a table with utilization color-coded against capacity."""
    def color_utilization(val):
        try:
            v = float(val)
        except (ValueError, TypeError):
            return ""
        if v > 100:
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        elif v >= NEAR_CAPACITY_THRESHOLD:
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        return "background-color: #d4edda; color: #155724"

    if utilization_column in df.columns:
        styled = df.style.map(color_utilization, subset=[utilization_column])
        st.dataframe(styled, use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)


def render_comparison_table(df: pd.DataFrame, change_columns: Optional[List[str]] = None):
    """Render a comparison table with positive/negative highlighting."""
    change_columns = change_columns or [c for c in df.columns if "Change" in c]

    def color_change(val):
        try:
            v = float(val)
            if v > 0:
                return "color: #155724; font-weight: bold"
            elif v < 0:
                return "color: #cc0000; font-weight: bold"
        except (ValueError, TypeError):
            pass
        return ""

    present = [c for c in change_columns if c in df.columns]
    if present:
        styled = df.style.map(color_change, subset=present)
        st.dataframe(styled, use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)
