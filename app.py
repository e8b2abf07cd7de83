"""School Revenue Forecaster — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.logging_config import configure_logging
from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_executive_summary,
    tab_campuses,
    tab_hostels,
    tab_additional_fees,
    tab_scenarios,
)


def main():
    st.set_page_config(
        page_title="School Revenue Forecaster",
        page_icon="🏫",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    configure_logging()
    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "📊 Executive Summary",
        "🏫 Campuses",
        "🛏️ Hostels",
        "💳 Additional Fees",
        "💾 Scenarios & Export",
    ])

    with tab1:
        tab_executive_summary.render(sidebar_state)
    with tab2:
        tab_campuses.render(sidebar_state)
    with tab3:
        tab_hostels.render(sidebar_state)
    with tab4:
        tab_additional_fees.render(sidebar_state)
    with tab5:
        tab_scenarios.render(sidebar_state)


if __name__ == "__main__":
    main()
