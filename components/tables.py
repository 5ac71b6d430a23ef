"""Styled dataframe display helpers."""

from typing import List

import pandas as pd
import streamlit as st

from models.classification import CoachOutcome
from engine.layout_generator import facing_summary


def seat_ranges(seats) -> str:
    """Compress [1,2,3,7,8] into "1-3, 7-8"."""
    if not seats:
        return "—"
    parts = []
    start = prev = seats[0]
    for s in list(seats[1:]) + [None]:
        if s is not None and s == prev + 1:
            prev = s
            continue
        parts.append(f"{start}-{prev}" if start != prev else str(start))
        if s is not None:
            start = prev = s
    return ", ".join(parts)


def coach_summary_df(outcomes: List[CoachOutcome]) -> pd.DataFrame:
    rows = []
    for o in outcomes:
        c = o.classification
        rows.append({
            "Position": o.position,
            "Coach": o.coach_code,
            "Class": o.class_short_code,
            "Template": o.template_source or "—",
            "Total Seats": c.total_seats if c else None,
            "Front Facing": seat_ranges(c.front_facing_seats) if c else "—",
            "Back Facing": seat_ranges(c.back_facing_seats) if c else "—",
            "Unclassified": c.unclassified_count if c else None,
            "Coach Facing": facing_summary(c) if c else "error",
            "Error": o.error or "",
        })
    return pd.DataFrame(rows)


def render_coach_table(outcomes: List[CoachOutcome], summary_column: str = "Coach Facing"):
    """Render the coach summary with colour-coded facing labels."""
    def color_summary(val):
        if val == "forward":
            return "background-color: #d6e6f7; color: #1f4e79; font-weight: bold"
        elif val == "backward":
            return "background-color: #e6e6e6; color: #333333; font-weight: bold"
        elif val == "mixed":
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        elif val == "error":
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        return ""

    df = coach_summary_df(outcomes)
    if summary_column in df.columns:
        styled = df.style.map(color_summary, subset=[summary_column])
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)
