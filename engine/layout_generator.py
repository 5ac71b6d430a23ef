"""Seat classification for a direction, plus the 2+3 row grid used for seat maps."""

import logging
import math
from typing import List, Optional, Set, Tuple, Union

from models.template import SeatTemplate
from models.route import ResolvedDirection
from models.classification import GridSeat, SeatClassification
from engine.errors import TemplateInvalidError
from config.defaults import (
    SEATS_PER_ROW, LEFT_SLOTS, SLOT_POSITIONS, FACING_COLORS,
    FACING_FRONT, FACING_BACK, FACING_UNKNOWN, DIRECTIONS,
    CONFIDENCE_AUTHORITATIVE,
    SUMMARY_FORWARD, SUMMARY_BACKWARD, SUMMARY_MIXED, SUMMARY_UNKNOWN,
)

logger = logging.getLogger(__name__)


def template_problems(template: SeatTemplate) -> List[str]:
    """Every reason the template cannot be classified (empty when valid)."""
    problems = []
    total = template.total_seats
    if not isinstance(total, int) or isinstance(total, bool) or total <= 0:
        problems.append(f"total seats must be a positive integer, got {total!r}")
        total = None

    for name, seat_range in (("front", template.front_range), ("back", template.back_range)):
        if seat_range is None:
            continue
        if seat_range.start < 1:
            problems.append(f"{name} range starts below seat 1 ({seat_range.label()})")
        if seat_range.end < seat_range.start:
            problems.append(f"{name} range ends before it starts ({seat_range.label()})")
        if total is not None and seat_range.end > total:
            problems.append(f"{name} range {seat_range.label()} exceeds {total} seats")

    front, back = template.front_range, template.back_range
    if front is not None and back is not None and front.overlaps(back):
        problems.append(f"front range {front.label()} overlaps back range {back.label()}")
    return problems


def validate_template(template: SeatTemplate, coach_code: Optional[str] = None) -> None:
    problems = template_problems(template)
    if problems:
        raise TemplateInvalidError(problems, coach_code=coach_code)


def base_seat_sets(template: SeatTemplate) -> Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]:
    """(front, back, unclassified) for the template's own forward orientation."""
    all_seats = range(1, template.total_seats + 1)
    front = tuple(template.front_range.seats) if template.front_range else ()

    # An explicit back range beats auto-fill
    if template.back_range is not None:
        back = tuple(template.back_range.seats)
    elif template.auto_back_fill:
        front_set = set(front)
        back = tuple(s for s in all_seats if s not in front_set)
    else:
        back = ()

    classified = set(front) | set(back)
    unclassified = tuple(s for s in all_seats if s not in classified)
    return front, back, unclassified


def facing_of(seat_number: int, front: Set[int], back: Set[int]) -> str:
    if seat_number in front:
        return FACING_FRONT
    if seat_number in back:
        return FACING_BACK
    return FACING_UNKNOWN


def build_grid(
    total_seats: int,
    front_facing_seats: Tuple[int, ...],
    back_facing_seats: Tuple[int, ...],
) -> List[List[GridSeat]]:
    """Row-major 2+3 grid; seat for row r, column c is r*5 + c + 1."""
    front, back = set(front_facing_seats), set(back_facing_seats)
    grid = []
    for row in range(math.ceil(total_seats / SEATS_PER_ROW)):
        row_seats = []
        for col in range(SEATS_PER_ROW):
            seat_number = row * SEATS_PER_ROW + col + 1
            if seat_number > total_seats:
                continue
            facing = facing_of(seat_number, front, back)
            row_seats.append(GridSeat(
                seat_number=seat_number,
                facing=facing,
                slot="left" if col < LEFT_SLOTS else "right",
                position=SLOT_POSITIONS[col],
                color=FACING_COLORS[facing],
            ))
        if row_seats:
            grid.append(row_seats)
    return grid


def classify(
    template: SeatTemplate,
    direction: Union[ResolvedDirection, str],
    include_grid: bool = False,
    coach_code: Optional[str] = None,
) -> SeatClassification:
    """Front/back seat sets for a template travelling in a direction.

    Reverse is a pure relabelling of the forward result: front and back
    swap, unclassified seats stay unclassified.
    """
    validate_template(template, coach_code)

    if isinstance(direction, ResolvedDirection):
        direction_name, route_code, confidence = direction.direction, direction.route_code, direction.confidence
    else:
        direction_name, route_code, confidence = direction, "", CONFIDENCE_AUTHORITATIVE
    if direction_name not in DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction_name!r}")

    front, back, unclassified = base_seat_sets(template)
    if direction_name == "reverse":
        front, back = back, front

    if unclassified:
        logger.debug("%s: %d seats left unclassified", coach_code or "template", len(unclassified))

    return SeatClassification(
        total_seats=template.total_seats,
        front_facing_seats=front,
        back_facing_seats=back,
        unclassified_seats=unclassified,
        direction=direction_name,
        route_code=route_code,
        confidence=confidence,
        grid=build_grid(template.total_seats, front, back) if include_grid else None,
    )


def swap_facing(classification: SeatClassification, route_code: Optional[str] = None) -> SeatClassification:
    """The same coach seen travelling the other way.

    The classification does not know the train's codes, so the other leg's
    route code has to be passed in; it is kept unchanged otherwise.
    """
    other = "forward" if classification.direction == "reverse" else "reverse"
    front, back = classification.back_facing_seats, classification.front_facing_seats
    grid = None
    if classification.grid is not None:
        grid = build_grid(classification.total_seats, front, back)
    return SeatClassification(
        total_seats=classification.total_seats,
        front_facing_seats=front,
        back_facing_seats=back,
        unclassified_seats=classification.unclassified_seats,
        direction=other,
        route_code=classification.route_code if route_code is None else route_code,
        confidence=classification.confidence,
        grid=grid,
    )


def seat_facing(classification: SeatClassification, seat_number: int) -> str:
    if seat_number < 1 or seat_number > classification.total_seats:
        raise ValueError(
            f"Seat {seat_number} is outside 1-{classification.total_seats}"
        )
    return facing_of(
        seat_number,
        set(classification.front_facing_seats),
        set(classification.back_facing_seats),
    )


def facing_summary(classification: SeatClassification) -> str:
    """Whole-coach label: forward, backward, mixed or unknown."""
    front, back = classification.front_facing_count, classification.back_facing_count
    if front and not back:
        return SUMMARY_FORWARD
    if back and not front:
        return SUMMARY_BACKWARD
    if front and back:
        return SUMMARY_MIXED
    return SUMMARY_UNKNOWN
