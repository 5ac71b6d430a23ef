from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RouteDeclaration:
    origin_station: str
    destination_station: str
    code_from_to: str = ""            # route code origin -> destination
    code_to_from: str = ""            # route code destination -> origin
    direction_hint: Optional[str] = None   # "forward"/"reverse" set by an earlier lookup
    is_reverse_direction: bool = False


@dataclass
class DirectionRequest:
    from_station: Optional[str] = None
    to_station: Optional[str] = None
    route_code: Optional[str] = None
    train_number: Optional[str] = None

    @property
    def has_station_pair(self) -> bool:
        return bool(self.from_station) and bool(self.to_station)

    @property
    def is_empty(self) -> bool:
        return not (self.from_station or self.to_station or self.route_code or self.train_number)


@dataclass
class ResolvedDirection:
    direction: str                    # "forward" or "reverse"
    route_code: str
    rule: str                         # which cascade step decided
    confidence: str                   # "authoritative", "heuristic", "default"
    explanation_steps: List[str] = field(default_factory=list)

    @property
    def is_reverse(self) -> bool:
        return self.direction == "reverse"

    @property
    def is_guess(self) -> bool:
        return self.confidence != "authoritative"
