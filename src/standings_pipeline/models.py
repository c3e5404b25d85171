"""Data models for championship standings."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class RaceResult:
    """One driver's outcome in a single race. Passed through untouched."""

    position: Optional[int]  # None when the driver did not start
    points_given: Number = 0
    penalty_points: Optional[Number] = None
    points_total: Number = 0
    dnf: bool = False
    dns: bool = False


@dataclass(frozen=True)
class StandingEntry:
    """A driver's standing within one class, as reported by one fragment."""

    position: int
    id: str
    car_num: Optional[int]
    car: str
    championship_points: Number = 0
    championship_penalties: Number = 0
    championship_score: Number = 0
    points_adjustment: Number = 0
    actual_points: Number = 0
    races: List[RaceResult] = field(default_factory=list)


@dataclass(frozen=True)
class ClassData:
    """One class record from a fragment: the class name and its standings."""

    car_class: str
    standings: List[StandingEntry] = field(default_factory=list)


@dataclass
class MergedStanding:
    """A driver's standing accumulated across every fragment of a class."""

    position: int
    id: str
    car_num: Optional[int]
    car: str
    championship_points: Number = 0
    championship_penalties: Number = 0
    championship_score: Number = 0
    points_adjustment: Number = 0
    actual_points: Number = 0
    races: List[RaceResult] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: StandingEntry) -> "MergedStanding":
        """Seed a merged standing from the first occurrence of a driver."""
        return cls(
            position=0,
            id=entry.id,
            car_num=entry.car_num,
            car=entry.car,
            championship_points=entry.championship_points,
            championship_penalties=entry.championship_penalties,
            championship_score=entry.championship_score,
            points_adjustment=entry.points_adjustment,
            actual_points=entry.actual_points,
            races=list(entry.races),
        )

    def absorb(self, entry: StandingEntry):
        """Fold a later occurrence of the same driver into this standing."""
        self.championship_points += entry.championship_points
        self.championship_penalties += entry.championship_penalties
        self.championship_score += entry.championship_score
        self.points_adjustment += entry.points_adjustment
        self.actual_points += entry.actual_points
        self.races.extend(entry.races)


@dataclass
class ClassStandings:
    """Merged and ranked standings for a single class."""

    car_class: str
    standings: List[MergedStanding] = field(default_factory=list)
