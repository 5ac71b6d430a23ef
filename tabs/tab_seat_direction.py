"""Tab 1: Seat Direction — which seats face the direction of travel."""

import json
from typing import Optional

import streamlit as st

from data.sample_data import FALLBACK_COACHES
from data.session_store import get_train, get_trains, get_coaches, get_travel_classes, get_rule_config
from engine.assembler import assemble_train_seats, index_records
from engine.direction_resolver import find_train_by_route_code, return_leg_request
from engine.layout_generator import seat_facing
from components.charts import seat_map_figure
from components.metrics_cards import render_seat_counts, render_direction_notice, render_metric_row
from components.tables import seat_ranges
from models.classification import TrainSeatReport
from models.route import DirectionRequest


def _selected_train(sidebar_state):
    train = get_train(sidebar_state.train_id) if sidebar_state.train_id else None
    request = sidebar_state.request
    if train is None and request.route_code:
        found = find_train_by_route_code(get_trains(), request.route_code)
        if found is not None:
            train = found[0]
    return train


def return_journey_request(sidebar_state) -> Optional[DirectionRequest]:
    train = _selected_train(sidebar_state)
    return return_leg_request(train.route if train is not None else None, sidebar_state.request, get_rule_config())


def build_report(sidebar_state, include_grid: bool = True, return_journey: bool = False) -> TrainSeatReport:
    """Seat report for the sidebar selection, shared by the display tabs.

    With return_journey the opposite leg is resolved as a request of its own.
    """
    train = _selected_train(sidebar_state)
    request = sidebar_state.request
    rule_config = get_rule_config()
    if return_journey:
        other = return_leg_request(train.route if train is not None else None, request, rule_config)
        if other is not None:
            request = other

    coaches_by_code, classes_by_code = index_records(get_coaches(), get_travel_classes())
    return assemble_train_seats(
        train,
        request,
        coaches_by_code,
        classes_by_code,
        fallback=FALLBACK_COACHES,
        include_grid=include_grid and rule_config.get("include_grid", True),
        coach_code=sidebar_state.coach_code,
        rule_config=rule_config,
    )


def render(sidebar_state):
    """Render the Seat Direction tab."""
    st.header("Seat Direction")

    can_return = return_journey_request(sidebar_state) is not None
    show_other_leg = st.toggle(
        "Show the return journey",
        key="seat_tab_other_leg",
        disabled=not can_return,
        help=None if can_return else "The opposite leg cannot be worked out from this selection.",
    )
    report = build_report(sidebar_state, return_journey=show_other_leg and can_return)

    route = f"{report.from_station} → {report.to_station}" if report.from_station else "Route not known"
    st.subheader(f"{report.train_name}: {route}")
    render_direction_notice(report.direction, report.confidence, report.route_code, report.explanation_steps)

    if report.fallback:
        st.info("No coach data on file for this train; showing the standard coach types.")

    for failure in report.failures:
        st.error(f"Coach {failure.coach_code}: {failure.error}")

    if not report.classified:
        st.warning("No coach could be classified for this selection.")
        return

    render_metric_row([
        {"label": "Coaches", "value": len(report.coaches)},
        {"label": "Front Facing", "value": sum(o.classification.front_facing_count for o in report.classified)},
        {"label": "Back Facing", "value": sum(o.classification.back_facing_count for o in report.classified)},
        {"label": "Failed", "value": len(report.failures)},
    ])

    st.divider()

    codes = [o.coach_code for o in report.classified]
    chosen = st.selectbox("Coach", codes, key="seat_tab_coach") if len(codes) > 1 else codes[0]
    outcome = next(o for o in report.classified if o.coach_code == chosen)
    classification = outcome.classification

    st.caption(f"Template from: **{outcome.template_source}** · Class: **{outcome.class_short_code or '—'}**")
    render_seat_counts(classification)

    if classification.grid:
        st.plotly_chart(
            seat_map_figure(classification.grid, title=f"Coach {chosen} ({classification.direction})"),
            use_container_width=True,
        )
        st.caption("🔵 faces the direction of travel · ⚪ gray faces backward · white is unclassified")

    col_lookup, col_export = st.columns(2)
    with col_lookup:
        seat_number = st.number_input(
            "Look up a seat",
            min_value=1,
            max_value=max(classification.total_seats, 1),
            value=1,
            step=1,
            key="seat_tab_lookup",
        )
        facing = seat_facing(classification, int(seat_number))
        labels = {"front": "faces forward", "back": "faces backward", "unknown": "is not classified"}
        st.write(f"Seat **{int(seat_number)}** {labels.get(facing, facing)}.")

    with col_export:
        st.download_button(
            "Download report (JSON)",
            data=json.dumps(report.to_dict(), indent=2),
            file_name=f"seats_{report.train_id}_{report.direction}.json",
            mime="application/json",
        )

    with st.expander("Seat lists"):
        st.write(f"**Front facing:** {seat_ranges(classification.front_facing_seats)}")
        st.write(f"**Back facing:** {seat_ranges(classification.back_facing_seats)}")
        if classification.unclassified_seats:
            st.write(f"**Unclassified:** {seat_ranges(classification.unclassified_seats)}")
