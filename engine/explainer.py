"""Generates human-readable explanations for template and direction decisions."""

from typing import List, Optional

from models.template import SeatRange


def _range_text(seat_range: Optional[SeatRange]) -> str:
    return seat_range.label() if seat_range else "none"


def explain_template(
    coach_code: str,
    source: str,
    total_seats: int,
    front_range: Optional[SeatRange],
    back_range: Optional[SeatRange],
    auto_back_fill: bool,
    class_short_code: str = "",
    skipped_override: bool = False,
) -> List[str]:
    """Describe which tier of the override chain produced a coach's template."""
    steps = []

    if skipped_override:
        steps.append(
            f"Step 1 - Override: flag is set for {coach_code} but no override seat count "
            f"was entered, so the override is ignored"
        )
    elif source == "override":
        steps.append(f"Step 1 - Override: per-train override is enabled for {coach_code}")
    else:
        steps.append(f"Step 1 - Override: none for {coach_code}")

    if source == "coach":
        steps.append(f"Step 2 - Coach template: {coach_code} defines its own layout")
    elif source == "travel_class":
        steps.append(
            f"Step 2 - Coach template: {coach_code} has no seat count, "
            f"using travel class {class_short_code or '<unknown>'} defaults"
        )

    if back_range is not None:
        back_text = f"explicit back range {_range_text(back_range)}"
    elif auto_back_fill:
        back_text = "back-facing seats auto-filled from the remaining seats"
    else:
        back_text = "no back range and auto-fill off, remaining seats unclassified"

    steps.append(
        f"Step 3 - Layout: {total_seats} seats, front range {_range_text(front_range)}, {back_text}"
    )
    return steps


def explain_direction(
    rule: str,
    direction: str,
    route_code: str,
    confidence: str,
    detail: str = "",
) -> List[str]:
    """Describe which cascade step decided the travel direction."""
    labels = {
        "route_code": "route code signal",
        "station_pair": "station pair",
        "upstream_flag": "direction flag on the train record",
        "train_number_parity": "train number parity",
        "default": "no usable signal",
    }
    steps = [f"Decided by {labels.get(rule, rule)}: {detail}" if detail else
             f"Decided by {labels.get(rule, rule)}"]
    steps.append(f"Direction {direction}, route code {route_code or 'n/a'}")
    if confidence == "heuristic":
        steps.append("Note: direction guessed from the train number, not from route data")
    elif confidence == "default":
        steps.append("Note: no direction information supplied, assuming forward")
    return steps
