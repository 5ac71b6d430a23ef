"""Tab 2: Coach Overview — facing per coach and every runnable train leg."""

import pandas as pd
import streamlit as st

from data.session_store import get_trains, is_data_loaded
from engine.direction_resolver import expand_directions, find_train_by_route_code, oriented_stations
from components.charts import coach_facing_bar
from components.tables import render_coach_table
from tabs.tab_seat_direction import build_report


def render(sidebar_state):
    """Render the Coach Overview tab."""
    st.header("Coach Overview")

    report = build_report(sidebar_state, include_grid=False)
    st.caption(f"{report.train_name}, travelling {report.direction}" + (f" on {report.route_code}" if report.route_code else ""))
    render_coach_table(report.coaches)
    for failure in report.failures:
        st.error(f"Coach {failure.coach_code}: {failure.error}")

    if report.classified:
        st.plotly_chart(coach_facing_bar(report), use_container_width=True)
    else:
        st.info("Nothing to chart for the current selection.")

    st.divider()
    st.subheader("Train Legs")

    if not is_data_loaded():
        st.info("Load data in the Data & Admin tab to list train legs.")
        return

    rows = []
    for train, resolved in expand_directions(get_trains()):
        from_station, to_station = oriented_stations(train.route, resolved.direction)
        rows.append({
            "Train": train.train_name,
            "Route Code": resolved.route_code,
            "Direction": resolved.direction,
            "From": from_station,
            "To": to_station,
            "Coaches": len(train.assignments),
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    code = st.text_input("Find a train by route code", key="overview_route_code")
    if code:
        found = find_train_by_route_code(get_trains(), code)
        if found is None:
            st.warning(f"No train runs route code {code}.")
        else:
            train, resolved = found
            from_station, to_station = oriented_stations(train.route, resolved.direction)
            st.success(f"{train.train_name}: {from_station} → {to_station} ({resolved.direction})")
