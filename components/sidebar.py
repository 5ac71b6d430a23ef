"""Global sidebar controls for train, direction and coach selection."""

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from data.session_store import get_trains, get_train, is_data_loaded, get_data_source
from engine.direction_resolver import opposite_train_number
from models.route import DirectionRequest
from config.defaults import PAGE_TITLE

DIRECTION_INPUTS = ["Stations", "Route code", "Train number only"]


@dataclass
class SidebarState:
    train_id: Optional[str]
    request: DirectionRequest
    coach_code: Optional[str]


def _station_inputs(train) -> DirectionRequest:
    if train is None:
        from_station = st.text_input("From", key="sidebar_from")
        to_station = st.text_input("To", key="sidebar_to")
        return DirectionRequest(from_station=from_station or None, to_station=to_station or None)

    stations = [train.route.origin_station, train.route.destination_station]
    if st.button("⇅ Swap direction", key="sidebar_swap"):
        st.session_state["sidebar_reversed"] = not st.session_state.get("sidebar_reversed", False)
    if st.session_state.get("sidebar_reversed", False):
        stations = stations[::-1]

    from_station = st.selectbox("From", stations, index=0, key=f"sidebar_from_{train.train_id}_{stations[0]}")
    to_options = [s for s in stations if s != from_station] or stations
    to_station = st.selectbox("To", to_options, index=0, key=f"sidebar_to_{train.train_id}_{stations[0]}")
    return DirectionRequest(from_station=from_station, to_station=to_station)


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title(PAGE_TITLE)
        st.divider()

        trains = get_trains()
        train_ids = [t.train_id for t in trains] + ["__unknown__"]
        names = {t.train_id: f"{t.train_name} ({t.route.code_from_to}/{t.route.code_to_from})" for t in trains}
        names["__unknown__"] = "Train not listed"

        selected = st.selectbox(
            "Train",
            options=train_ids,
            format_func=lambda x: names.get(x, x),
            key="sidebar_train",
        )
        train = get_train(selected) if selected != "__unknown__" else None

        mode = st.radio("Direction from", DIRECTION_INPUTS, key="sidebar_mode")
        if mode == "Stations":
            request = _station_inputs(train)
        elif mode == "Route code":
            code = st.text_input("Route code", key="sidebar_route_code", placeholder="e.g. 101, 103")
            request = DirectionRequest(route_code=code or None)
        else:
            number = st.text_input("Train number", key="sidebar_train_number", placeholder="e.g. 701")
            request = DirectionRequest(train_number=number or None)
            paired = opposite_train_number(number) if number else None
            if paired:
                st.caption(f"Opposite direction runs as {paired}")

        coach_options = ["All coaches"]
        if train is not None:
            coach_options += [a.coach_code for a in train.assignments]
        coach = st.selectbox("Coach", coach_options, key="sidebar_coach")

        st.divider()
        if is_data_loaded():
            st.success(f"Data loaded ({get_data_source()})")
        else:
            st.warning("No data loaded — go to the Data & Admin tab")

    return SidebarState(
        train_id=train.train_id if train is not None else None,
        request=request,
        coach_code=None if coach == "All coaches" else coach,
    )
