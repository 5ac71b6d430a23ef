"""Response assembly: classify every coach of a train and wrap it with train metadata."""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models.route import DirectionRequest, ResolvedDirection
from models.rolling_stock import Coach, TravelClass, CoachAssignment, Train, FallbackCoach
from models.classification import CoachOutcome, TrainSeatReport
from engine.errors import TemplateInvalidError, TemplateUnresolvedError
from engine.template_resolver import resolve_template
from engine.direction_resolver import resolve_direction, oriented_stations
from engine.layout_generator import classify

logger = logging.getLogger(__name__)


def index_records(
    coaches: Iterable[Coach],
    travel_classes: Iterable[TravelClass],
) -> Tuple[Dict[str, Coach], Dict[str, TravelClass]]:
    """Lookup tables keyed by upper-cased coach code and class short code."""
    coaches_by_code = {c.coach_code.strip().upper(): c for c in coaches}
    classes_by_code = {t.short_code.strip().upper(): t for t in travel_classes}
    return coaches_by_code, classes_by_code


def classify_coaches(
    assignments: Sequence[CoachAssignment],
    coaches_by_code: Dict[str, Coach],
    classes_by_code: Dict[str, TravelClass],
    direction: ResolvedDirection,
    include_grid: bool = False,
    rule_config: Optional[dict] = None,
) -> List[CoachOutcome]:
    """Classify each assignment independently; a bad coach is reported, not fatal."""
    outcomes = []
    for assignment in assignments:
        code = assignment.coach_code.strip().upper()
        outcome = CoachOutcome(
            coach_code=code,
            class_short_code=assignment.class_short_code,
            position=assignment.position,
        )
        try:
            template = resolve_template(
                assignment,
                coaches_by_code.get(code),
                classes_by_code.get(assignment.class_short_code.strip().upper()),
                rule_config,
            )
            outcome.template_source = template.source
            outcome.classification = classify(template, direction, include_grid, coach_code=code)
        except (TemplateUnresolvedError, TemplateInvalidError) as e:
            logger.warning("Coach %s not classified: %s", code, e)
            outcome.error = str(e)
        outcomes.append(outcome)
    return outcomes


def classify_fallback(
    fallback: Sequence[FallbackCoach],
    direction: ResolvedDirection,
    include_grid: bool = False,
) -> List[CoachOutcome]:
    outcomes = []
    for position, entry in enumerate(fallback, start=1):
        template = entry.to_template()
        outcome = CoachOutcome(
            coach_code=entry.coach_code,
            class_short_code=entry.class_short_code,
            position=position,
            template_source=template.source,
        )
        try:
            outcome.classification = classify(template, direction, include_grid, coach_code=entry.coach_code)
        except TemplateInvalidError as e:
            logger.warning("Fallback coach %s not classified: %s", entry.coach_code, e)
            outcome.error = str(e)
        outcomes.append(outcome)
    return outcomes


def assemble_train_seats(
    train: Optional[Train],
    request: DirectionRequest,
    coaches_by_code: Dict[str, Coach],
    classes_by_code: Dict[str, TravelClass],
    fallback: Optional[Sequence[FallbackCoach]] = None,
    include_grid: bool = False,
    coach_code: Optional[str] = None,
    rule_config: Optional[dict] = None,
) -> TrainSeatReport:
    """Seat report for one train and requested direction.

    When the train is unknown or has no coach assignments, the injected
    fallback table (if any) is classified instead and the report is flagged.
    """
    route = train.route if train is not None else None
    direction = resolve_direction(route, request, rule_config)

    assignments = list(train.assignments) if train is not None else []
    wanted = coach_code.strip().upper() if coach_code else None

    use_fallback = not assignments and fallback is not None
    if use_fallback:
        logger.warning(
            "No coach data for train %s; using fallback coach table",
            train.train_id if train is not None else (request.train_number or request.route_code),
        )
        entries = [f for f in fallback if wanted is None or f.coach_code.upper() == wanted]
        coaches = classify_fallback(entries, direction, include_grid)
    else:
        if wanted is not None:
            assignments = [a for a in assignments if a.coach_code.strip().upper() == wanted]
        coaches = classify_coaches(assignments, coaches_by_code, classes_by_code, direction,
                                   include_grid, rule_config)

    if route is not None:
        from_station, to_station = oriented_stations(route, direction.direction)
    else:
        from_station, to_station = request.from_station or "", request.to_station or ""

    identifier = request.train_number or direction.route_code or "unknown"
    return TrainSeatReport(
        train_id=train.train_id if train is not None else identifier,
        train_name=train.train_name if train is not None else f"Train {identifier}",
        from_station=from_station,
        to_station=to_station,
        direction=direction.direction,
        route_code=direction.route_code,
        confidence=direction.confidence,
        rule=direction.rule,
        coaches=coaches,
        fallback=use_fallback,
        explanation_steps=list(direction.explanation_steps),
    )
