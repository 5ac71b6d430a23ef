"""Seat Direction Guide — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from config.defaults import LOG_LEVEL, LOG_FILE, PAGE_TITLE, PAGE_ICON
from config.logging_config import setup_logging
from data.session_store import initialize_session_state
from tabs import (
    tab_seat_direction,
    tab_coach_overview,
    tab_data_admin,
)


def main():
    st.set_page_config(
        page_title=PAGE_TITLE,
        page_icon=PAGE_ICON,
        layout="wide",
        initial_sidebar_state="expanded",
    )

    setup_logging(LOG_LEVEL, LOG_FILE)
    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "💺 Seat Direction",
        "🚃 Coach Overview",
        "⚙️ Data & Admin",
    ])

    with tab1:
        tab_seat_direction.render(sidebar_state)
    with tab2:
        tab_coach_overview.render(sidebar_state)
    with tab3:
        tab_data_admin.render(sidebar_state)


if __name__ == "__main__":
    main()
