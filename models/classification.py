from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class GridSeat:
    seat_number: int
    facing: str          # "front", "back", "unknown"
    slot: str            # "left" or "right"
    position: str        # "left-left", "left-right", "right-left", "right-mid", "right-right"
    color: str

    def to_dict(self) -> dict:
        return {
            "seatNumber": self.seat_number,
            "facing": self.facing,
            "slot": self.slot,
            "position": self.position,
            "color": self.color,
        }


@dataclass
class SeatClassification:
    total_seats: int
    front_facing_seats: Tuple[int, ...]
    back_facing_seats: Tuple[int, ...]
    unclassified_seats: Tuple[int, ...]
    direction: str
    route_code: str
    confidence: str = "authoritative"
    grid: Optional[List[List[GridSeat]]] = None

    @property
    def front_facing_count(self) -> int:
        return len(self.front_facing_seats)

    @property
    def back_facing_count(self) -> int:
        return len(self.back_facing_seats)

    @property
    def unclassified_count(self) -> int:
        return len(self.unclassified_seats)

    def to_dict(self) -> dict:
        result = {
            "totalSeats": self.total_seats,
            "frontFacingSeats": list(self.front_facing_seats),
            "backFacingSeats": list(self.back_facing_seats),
            "unclassifiedSeats": list(self.unclassified_seats),
            "frontFacingCount": self.front_facing_count,
            "backFacingCount": self.back_facing_count,
            "direction": self.direction,
            "routeCode": self.route_code,
            "confidence": self.confidence,
        }
        if self.grid is not None:
            result["grid"] = [[seat.to_dict() for seat in row] for row in self.grid]
        return result


@dataclass
class CoachOutcome:
    coach_code: str
    class_short_code: str
    position: int
    classification: Optional[SeatClassification] = None
    template_source: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.classification is not None

    def to_dict(self) -> dict:
        data = {
            "coachCode": self.coach_code,
            "classShortCode": self.class_short_code,
            "position": self.position,
            "templateSource": self.template_source,
        }
        if self.classification is not None:
            data.update(self.classification.to_dict())
        else:
            data["error"] = self.error
        return data


@dataclass
class TrainSeatReport:
    train_id: str
    train_name: str
    from_station: str
    to_station: str
    direction: str
    route_code: str
    confidence: str
    rule: str
    coaches: List[CoachOutcome] = field(default_factory=list)
    fallback: bool = False
    explanation_steps: List[str] = field(default_factory=list)

    @property
    def failures(self) -> List[CoachOutcome]:
        return [c for c in self.coaches if not c.ok]

    @property
    def classified(self) -> List[CoachOutcome]:
        return [c for c in self.coaches if c.ok]

    def to_dict(self) -> dict:
        return {
            "trainId": self.train_id,
            "trainName": self.train_name,
            "fromStation": self.from_station,
            "toStation": self.to_station,
            "direction": self.direction,
            "routeCode": self.route_code,
            "confidence": self.confidence,
            "rule": self.rule,
            "coaches": [c.to_dict() for c in self.classified],
            "failures": [
                {"coachCode": c.coach_code, "error": c.error} for c in self.failures
            ],
            "count": len(self.classified),
            "fallback": self.fallback,
        }
