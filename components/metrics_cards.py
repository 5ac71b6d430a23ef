"""Reusable KPI metric card and direction notice widgets."""

import streamlit as st

from models.classification import SeatClassification


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_seat_counts(classification: SeatClassification):
    render_metric_row([
        {"label": "Total Seats", "value": classification.total_seats},
        {"label": "Front Facing", "value": classification.front_facing_count},
        {"label": "Back Facing", "value": classification.back_facing_count},
        {"label": "Unclassified", "value": classification.unclassified_count},
    ])


def render_direction_notice(direction: str, confidence: str, route_code: str, steps: list[str]):
    """Show the resolved direction; warn when it is only a guess."""
    text = f"Travelling **{direction}**" + (f" on route code **{route_code}**" if route_code else "")
    if confidence == "heuristic":
        st.warning(f"{text} — guessed from the train number, please confirm your stations.", icon="🟡")
    elif confidence == "default":
        st.warning(f"{text} — no direction given, assuming forward.", icon="🟡")
    else:
        st.info(text, icon="🔵")
    with st.expander("How was the direction decided?"):
        for step in steps:
            st.write(f"- {step}")
