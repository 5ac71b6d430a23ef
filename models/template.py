from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class SeatRange:
    start: int
    end: int

    @property
    def seats(self) -> List[int]:
        return list(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def overlaps(self, other: "SeatRange") -> bool:
        return self.start <= other.end and other.start <= self.end

    def label(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class SeatTemplate:
    total_seats: int
    front_range: Optional[SeatRange] = None
    back_range: Optional[SeatRange] = None
    auto_back_fill: bool = True
    source: str = "coach"             # "override", "coach", "travel_class", "fallback"
    explanation_steps: List[str] = field(default_factory=list)
