from dataclasses import dataclass, field
from typing import List, Optional

from models.route import RouteDeclaration
from models.template import SeatRange, SeatTemplate


@dataclass
class Coach:
    coach_code: str
    total_seats: int = 0
    front_start: Optional[int] = None
    front_end: Optional[int] = None
    back_start: Optional[int] = None
    back_end: Optional[int] = None
    auto_back_fill: bool = True


@dataclass
class TravelClass:
    class_name: str
    short_code: str
    default_total_seats: Optional[int] = None
    default_front_start: Optional[int] = None
    default_front_end: Optional[int] = None
    default_back_start: Optional[int] = None
    default_back_end: Optional[int] = None
    default_auto_back_fill: bool = True

    @property
    def has_defaults(self) -> bool:
        fields = (
            self.default_total_seats, self.default_front_start, self.default_front_end,
            self.default_back_start, self.default_back_end,
        )
        return any(v is not None for v in fields)


@dataclass
class CoachAssignment:
    """One coach slot inside a train's travel class, with its optional per-train override."""
    coach_code: str
    class_short_code: str
    position: int = 0
    override_enabled: bool = False
    total_seats: Optional[int] = None
    front_start: Optional[int] = None
    front_end: Optional[int] = None
    back_start: Optional[int] = None
    back_end: Optional[int] = None
    auto_back_fill: Optional[bool] = None


@dataclass
class Train:
    train_id: str
    train_name: str
    route: RouteDeclaration
    assignments: List[CoachAssignment] = field(default_factory=list)

    @property
    def coach_codes(self) -> List[str]:
        return [a.coach_code for a in self.assignments]


@dataclass(frozen=True)
class FallbackCoach:
    """Stand-in coach used when the content store has nothing for a train."""
    coach_code: str
    class_short_code: str
    total_seats: int
    front_range: Optional[SeatRange] = None
    back_range: Optional[SeatRange] = None
    auto_back_fill: bool = True

    def to_template(self) -> SeatTemplate:
        """A fresh template each call, so callers cannot alter the shared table."""
        return SeatTemplate(
            total_seats=self.total_seats,
            front_range=self.front_range,
            back_range=self.back_range,
            auto_back_fill=self.auto_back_fill,
            source="fallback",
        )
