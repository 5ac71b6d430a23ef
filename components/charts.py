"""Plotly chart builders for the Seat Direction Guide."""

from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from models.classification import GridSeat, TrainSeatReport
from config.defaults import FACING_HEX, SEATS_PER_ROW, LEFT_SLOTS

# x offset of the aisle between the 2-seat and 3-seat blocks
AISLE_WIDTH = 0.8


def _seat_x(position_index: int) -> float:
    return position_index + (AISLE_WIDTH if position_index >= LEFT_SLOTS else 0)


def seat_map_figure(grid: List[List[GridSeat]], title: str = "Seat Map") -> go.Figure:
    """Seat grid as coloured squares: 2 seats, aisle, 3 seats per row."""
    xs, ys, colors, labels, hover = [], [], [], [], []
    for row_idx, row in enumerate(grid):
        for seat in row:
            col = (seat.seat_number - 1) % SEATS_PER_ROW
            xs.append(_seat_x(col))
            ys.append(row_idx)
            colors.append(FACING_HEX.get(seat.color, "#E6E6E6"))
            labels.append(str(seat.seat_number))
            hover.append(f"Seat {seat.seat_number}<br>Facing: {seat.facing}<br>{seat.position}")

    fig = go.Figure(data=go.Scatter(
        x=xs,
        y=ys,
        mode="markers+text",
        marker=dict(symbol="square", size=34, color=colors, line=dict(color="white", width=2)),
        text=labels,
        textfont=dict(color="white", size=11),
        hovertext=hover,
        hoverinfo="text",
    ))
    fig.update_layout(
        title=title,
        height=max(300, len(grid) * 42 + 80),
        showlegend=False,
        xaxis=dict(visible=False, range=[-0.7, SEATS_PER_ROW + AISLE_WIDTH - 0.3]),
        yaxis=dict(visible=False, autorange="reversed"),
        margin=dict(l=10, r=10, t=50, b=10),
        plot_bgcolor="white",
    )
    return fig


def coach_facing_bar(report: TrainSeatReport, title: str = "Seat Facing by Coach") -> go.Figure:
    """Stacked bar of front / back / unclassified seats per classified coach."""
    rows = []
    for outcome in report.classified:
        c = outcome.classification
        rows.append({"Coach": outcome.coach_code, "Facing": "Front", "Seats": c.front_facing_count})
        rows.append({"Coach": outcome.coach_code, "Facing": "Back", "Seats": c.back_facing_count})
        rows.append({"Coach": outcome.coach_code, "Facing": "Unclassified", "Seats": c.unclassified_count})
    df = pd.DataFrame(rows, columns=["Coach", "Facing", "Seats"])
    fig = px.bar(
        df, x="Coach", y="Seats", color="Facing",
        barmode="stack",
        title=title,
        color_discrete_map={
            "Front": FACING_HEX["blue"],
            "Back": FACING_HEX["gray"],
            "Unclassified": FACING_HEX["white"],
        },
    )
    fig.update_layout(legend_title_text="", height=380)
    return fig
