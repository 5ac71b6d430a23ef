"""Travel direction resolution: is a request the train's forward or reverse leg?"""

import logging
from typing import Iterable, List, Optional, Tuple

from models.route import RouteDeclaration, DirectionRequest, ResolvedDirection
from models.rolling_stock import Train
from engine.explainer import explain_direction
from config.defaults import (
    REVERSE_ROUTE_CODES, REVERSE_CODE_TOKENS, ODD_NUMBER_DIRECTION,
    CONFIDENCE_AUTHORITATIVE, CONFIDENCE_HEURISTIC, CONFIDENCE_DEFAULT,
    RULE_ROUTE_CODE, RULE_STATION_PAIR, RULE_UPSTREAM_FLAG,
    RULE_TRAIN_NUMBER_PARITY, RULE_DEFAULT, DEFAULT_DIRECTION,
)

logger = logging.getLogger(__name__)


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _other(direction: str) -> str:
    return "forward" if direction == "reverse" else "reverse"


def is_reverse_route_code(
    route_code: Optional[str],
    route: Optional[RouteDeclaration] = None,
    rule_config: Optional[dict] = None,
) -> bool:
    """True when a route code marks the reverse leg.

    Recognised markers: a configured reverse code ("103"), a code containing
    "reverse" or "return", or the train's own to->from code.
    """
    cfg = rule_config or {}
    code = _norm(route_code)
    if not code:
        return False

    reverse_codes = {_norm(c) for c in cfg.get("reverse_route_codes", REVERSE_ROUTE_CODES)}
    if code in reverse_codes:
        return True

    tokens = [_norm(t) for t in cfg.get("reverse_code_tokens", REVERSE_CODE_TOKENS)]
    if any(t and t in code for t in tokens):
        return True

    if route is not None:
        to_from = _norm(route.code_to_from)
        from_to = _norm(route.code_from_to)
        if to_from and code == to_from and code != from_to:
            return True
    return False


def is_station_pair_reversed(route: Optional[RouteDeclaration], request: DirectionRequest) -> bool:
    if route is None or not request.has_station_pair:
        return False
    return (
        _norm(request.from_station) == _norm(route.destination_station)
        and _norm(request.to_station) == _norm(route.origin_station)
    )


def has_upstream_reverse_flag(route: Optional[RouteDeclaration]) -> bool:
    if route is None:
        return False
    return _norm(route.direction_hint) == "reverse" or bool(route.is_reverse_direction)


def parity_direction(train_number: Optional[str], rule_config: Optional[dict] = None) -> Optional[str]:
    """Direction guessed from an odd/even train number, or None if not numeric."""
    cfg = rule_config or {}
    odd_direction = cfg.get("odd_number_direction", ODD_NUMBER_DIRECTION)
    try:
        number = int(str(train_number).strip())
    except (TypeError, ValueError):
        return None
    return odd_direction if number % 2 == 1 else _other(odd_direction)


def _parity_word(train_number: str) -> str:
    return "odd" if int(str(train_number).strip()) % 2 == 1 else "even"


def route_code_for(route: Optional[RouteDeclaration], direction: str, fallback: str = "") -> str:
    if route is None:
        return fallback
    code = route.code_to_from if direction == "reverse" else route.code_from_to
    return code or fallback


def _result(
    route: Optional[RouteDeclaration],
    request: DirectionRequest,
    direction: str,
    rule: str,
    confidence: str,
    detail: str,
) -> ResolvedDirection:
    code = route_code_for(route, direction, fallback=(request.route_code or "").strip())
    logger.debug("Direction %s via %s (%s)", direction, rule, confidence)
    return ResolvedDirection(
        direction=direction,
        route_code=code,
        rule=rule,
        confidence=confidence,
        explanation_steps=explain_direction(rule, direction, code, confidence, detail),
    )


def resolve_direction(
    route: Optional[RouteDeclaration],
    request: DirectionRequest,
    rule_config: Optional[dict] = None,
) -> ResolvedDirection:
    """Run the direction cascade; the first rule that fires wins.

    1. reverse route code marker
    2. requested stations are destination -> origin
    3. reverse flag already on the train record
    4. train number parity (only when the request has no code or stations)
    5. forward
    """
    # Rule 1: explicit route-code signal
    if is_reverse_route_code(request.route_code, route, rule_config):
        return _result(route, request, "reverse", RULE_ROUTE_CODE, CONFIDENCE_AUTHORITATIVE,
                       f"code {request.route_code.strip()} marks the return leg")

    # Rule 2: station pair inversion
    if is_station_pair_reversed(route, request):
        return _result(route, request, "reverse", RULE_STATION_PAIR, CONFIDENCE_AUTHORITATIVE,
                       f"{request.from_station} -> {request.to_station} runs destination to origin")

    # Rule 3: upstream flag
    if has_upstream_reverse_flag(route):
        return _result(route, request, "reverse", RULE_UPSTREAM_FLAG, CONFIDENCE_AUTHORITATIVE,
                       "train record is already marked reverse")

    # Rule 4: numeric parity, last resort
    no_route_info = not (request.route_code or request.from_station or request.to_station)
    if no_route_info and request.train_number:
        guessed = parity_direction(request.train_number, rule_config)
        if guessed is not None:
            logger.warning("Direction for train %s guessed from number parity", request.train_number)
            return _result(route, request, guessed, RULE_TRAIN_NUMBER_PARITY, CONFIDENCE_HEURISTIC,
                           f"train number {request.train_number.strip()} is {_parity_word(request.train_number)}")

    # Rule 5: forward. Tag it when the request explicitly named the forward leg.
    if route is not None:
        if (request.has_station_pair
                and _norm(request.from_station) == _norm(route.origin_station)
                and _norm(request.to_station) == _norm(route.destination_station)):
            return _result(route, request, "forward", RULE_STATION_PAIR, CONFIDENCE_AUTHORITATIVE,
                           f"{request.from_station} -> {request.to_station} runs origin to destination")
        if _norm(request.route_code) and _norm(request.route_code) == _norm(route.code_from_to):
            return _result(route, request, "forward", RULE_ROUTE_CODE, CONFIDENCE_AUTHORITATIVE,
                           f"code {request.route_code.strip()} is the forward leg")

    if request.is_empty:
        logger.warning("No direction signal in request; defaulting to %s", DEFAULT_DIRECTION)
    else:
        logger.warning("Request %s matched no direction rule; defaulting to %s", request, DEFAULT_DIRECTION)
    return _result(route, request, DEFAULT_DIRECTION, RULE_DEFAULT, CONFIDENCE_DEFAULT, "")


def oriented_stations(route: RouteDeclaration, direction: str) -> Tuple[str, str]:
    """(from, to) station names as travelled in the given direction."""
    if direction == "reverse":
        return route.destination_station, route.origin_station
    return route.origin_station, route.destination_station


def find_train_by_route_code(
    trains: Iterable[Train],
    route_code: str,
) -> Optional[Tuple[Train, ResolvedDirection]]:
    """Locate the train running a route code and the leg that code denotes."""
    code = _norm(route_code)
    if not code:
        return None
    for train in trains:
        from_to = _norm(train.route.code_from_to)
        to_from = _norm(train.route.code_to_from)
        if code not in (from_to, to_from):
            continue
        direction = "reverse" if code == to_from and code != from_to else "forward"
        matched = (train.route.code_to_from if direction == "reverse" else train.route.code_from_to)
        resolved = ResolvedDirection(
            direction=direction,
            route_code=matched,
            rule=RULE_ROUTE_CODE,
            confidence=CONFIDENCE_AUTHORITATIVE,
            explanation_steps=explain_direction(
                RULE_ROUTE_CODE, direction, matched, CONFIDENCE_AUTHORITATIVE,
                f"code {route_code.strip()} belongs to {train.train_name}",
            ),
        )
        return train, resolved
    return None


def expand_directions(trains: Iterable[Train]) -> List[Tuple[Train, ResolvedDirection]]:
    """One entry per runnable leg: forward when it has a code, reverse when its code differs."""
    results = []
    for train in trains:
        from_to = (train.route.code_from_to or "").strip()
        to_from = (train.route.code_to_from or "").strip()
        legs = []
        if from_to:
            legs.append(("forward", from_to))
        if to_from and to_from != from_to:
            legs.append(("reverse", to_from))
        for direction, code in legs:
            results.append((train, ResolvedDirection(
                direction=direction,
                route_code=code,
                rule=RULE_ROUTE_CODE,
                confidence=CONFIDENCE_AUTHORITATIVE,
                explanation_steps=explain_direction(RULE_ROUTE_CODE, direction, code, CONFIDENCE_AUTHORITATIVE),
            )))
    return results


def opposite_train_number(train_number: str) -> Optional[str]:
    """Paired number for the other direction: 701 <-> 702."""
    try:
        number = int(str(train_number).strip())
    except (TypeError, ValueError):
        return None
    return str(number + 1 if number % 2 == 1 else number - 1)


def return_leg_request(
    route: Optional[RouteDeclaration],
    request: DirectionRequest,
    rule_config: Optional[dict] = None,
) -> Optional[DirectionRequest]:
    """A request for the opposite leg of the one `request` resolves to.

    With a known route the other leg is named by its stations; without one only
    a train number can be flipped. None when the opposite leg cannot be expressed.
    """
    current = resolve_direction(route, request, rule_config)
    if route is not None:
        from_station, to_station = oriented_stations(route, _other(current.direction))
        if not (from_station and to_station):
            return None
        other = DirectionRequest(from_station=from_station, to_station=to_station)
        # an upstream reverse flag pins every request on this route to one leg
        if resolve_direction(route, other, rule_config).direction == current.direction:
            return None
        return other
    if request.train_number and not (request.route_code or request.from_station or request.to_station):
        paired = opposite_train_number(request.train_number)
        if paired is not None:
            return DirectionRequest(train_number=paired)
    return None
