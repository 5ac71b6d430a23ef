"""Three-tier seat template resolution: train override, coach, travel class."""

import logging
from typing import Optional

from models.template import SeatRange, SeatTemplate
from models.rolling_stock import Coach, TravelClass, CoachAssignment
from engine.errors import TemplateUnresolvedError
from engine.explainer import explain_template
from config.defaults import DEFAULT_AUTO_BACK_FILL

logger = logging.getLogger(__name__)


def build_range(start: Optional[int], end: Optional[int]) -> Optional[SeatRange]:
    """A range exists only when both ends are filled in (0 counts as blank)."""
    if not start or not end:
        return None
    return SeatRange(int(start), int(end))


def _positive(value: Optional[int]) -> bool:
    return value is not None and value > 0


def override_is_populated(assignment: Optional[CoachAssignment]) -> bool:
    return (
        assignment is not None
        and assignment.override_enabled
        and _positive(assignment.total_seats)
    )


def resolve_template(
    assignment: Optional[CoachAssignment],
    coach: Optional[Coach],
    travel_class: Optional[TravelClass],
    rule_config: Optional[dict] = None,
) -> SeatTemplate:
    """Pick the effective seat template for one coach of one train.

    Only the highest tier present is used; fields are never merged across
    tiers. Raises TemplateUnresolvedError when no tier has a positive seat
    count.
    """
    cfg = rule_config or {}
    default_auto = cfg.get("default_auto_back_fill", DEFAULT_AUTO_BACK_FILL)

    coach_code = (
        (assignment.coach_code if assignment else None)
        or (coach.coach_code if coach else None)
        or "<unknown>"
    )
    class_code = travel_class.short_code if travel_class else (
        assignment.class_short_code if assignment else ""
    )

    skipped_override = bool(assignment and assignment.override_enabled and not override_is_populated(assignment))
    if skipped_override:
        logger.warning(
            "Override flag set for coach %s without an override seat count; falling back", coach_code,
        )

    # Tier 1: per-train override
    if override_is_populated(assignment):
        auto = assignment.auto_back_fill if assignment.auto_back_fill is not None else default_auto
        template = SeatTemplate(
            total_seats=assignment.total_seats,
            front_range=build_range(assignment.front_start, assignment.front_end),
            back_range=build_range(assignment.back_start, assignment.back_end),
            auto_back_fill=auto,
            source="override",
        )
    # Tier 2: the coach's own template
    elif coach is not None and _positive(coach.total_seats):
        template = SeatTemplate(
            total_seats=coach.total_seats,
            front_range=build_range(coach.front_start, coach.front_end),
            back_range=build_range(coach.back_start, coach.back_end),
            auto_back_fill=coach.auto_back_fill,
            source="coach",
        )
    # Tier 3: travel class defaults
    elif travel_class is not None and travel_class.has_defaults:
        # a coach with its own seat count never reaches this tier
        total = travel_class.default_total_seats
        if not _positive(total):
            raise TemplateUnresolvedError(
                coach_code,
                f"No seat data available for coach {coach_code}: "
                f"travel class {class_code} has no default seat count",
            )
        template = SeatTemplate(
            total_seats=total,
            front_range=build_range(travel_class.default_front_start, travel_class.default_front_end),
            back_range=build_range(travel_class.default_back_start, travel_class.default_back_end),
            auto_back_fill=travel_class.default_auto_back_fill,
            source="travel_class",
        )
    else:
        raise TemplateUnresolvedError(coach_code)

    template.explanation_steps = explain_template(
        coach_code=coach_code,
        source=template.source,
        total_seats=template.total_seats,
        front_range=template.front_range,
        back_range=template.back_range,
        auto_back_fill=template.auto_back_fill,
        class_short_code=class_code,
        skipped_override=skipped_override,
    )
    logger.debug("Coach %s resolved from %s tier (%d seats)", coach_code, template.source, template.total_seats)
    return template
