"""
Attraction and show models.
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Set

from models.availability import AvailabilityWindow
from models.calendar import DayLike, to_day
from models.roster import WorkplaceRoster
from models.tier import ExclusivityTier


class AttractionKind(Enum):
    """Kinds of attractions in the park."""
    MECHANICAL = "Mechanical"
    CULTURAL = "Cultural"

    @classmethod
    def from_string(cls, value: str) -> "AttractionKind":
        """Convert string to AttractionKind enum."""
        mapping = {
            "mechanical": cls.MECHANICAL,
            "mecanica": cls.MECHANICAL,
            "cultural": cls.CULTURAL,
        }
        return mapping.get(str(value).lower().strip(), cls.CULTURAL)


class RiskLevel(Enum):
    """Operating risk of a mechanical ride."""
    HIGH = "High"
    MEDIUM = "Medium"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["RiskLevel"]:
        if value is None:
            return None
        mapping = {
            "high": cls.HIGH,
            "alto": cls.HIGH,
            "medium": cls.MEDIUM,
            "medio": cls.MEDIUM,
        }
        return mapping.get(str(value).lower().strip())


@dataclass
class Attraction:
    """
    A ride or cultural attraction.

    Attributes:
        name: Unique name, used as the catalogue key
        kind: Mechanical or cultural
        exclusivity: Minimum ticket tier for entry
        required_staff: Minimum employees per shift
        location: Where in the park it stands
        capacity: Visitors per run
        weather_restriction: Free-text weather rule (e.g. "No rain")
        risk_level: High or medium, mechanical rides only
        min_age: Minimum visitor age, cultural attractions only
        window: Season and maintenance blackouts
        roster: Staff rostered on the attraction
    """
    name: str
    kind: AttractionKind = AttractionKind.CULTURAL
    exclusivity: ExclusivityTier = ExclusivityTier.FAMILIAR
    required_staff: int = 1
    location: str = ""
    capacity: int = 0
    weather_restriction: str = ""
    risk_level: Optional[RiskLevel] = None
    min_age: int = 0
    window: AvailabilityWindow = field(default_factory=AvailabilityWindow)
    roster: WorkplaceRoster = field(default_factory=WorkplaceRoster, repr=False)

    def is_available(self, day: Optional[DayLike]) -> bool:
        """Check if the attraction is open on a day."""
        return self.window.is_available(day)

    def schedule_maintenance(self, start: Optional[DayLike], end: Optional[DayLike]) -> int:
        """Black out an inclusive range of days for maintenance."""
        return self.window.schedule_maintenance(start, end)

    @property
    def is_mechanical(self) -> bool:
        return self.kind == AttractionKind.MECHANICAL

    @property
    def is_high_risk(self) -> bool:
        return self.is_mechanical and self.risk_level == RiskLevel.HIGH

    @property
    def is_medium_risk(self) -> bool:
        return self.is_mechanical and self.risk_level == RiskLevel.MEDIUM

    def __str__(self) -> str:
        risk = f", {self.risk_level.value} risk" if self.risk_level else ""
        return f"{self.name} ({self.kind.value}, {self.exclusivity.value}{risk})"

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        if isinstance(other, Attraction):
            return self.name == other.name
        return False


# =============================================================================
# SHOW MODEL
# =============================================================================

@dataclass
class Show:
    """
    A scheduled show with individual performance days.

    Attributes:
        name: Show name
        schedule: Free-text timetable (e.g. "18:00 and 21:00")
        duration_minutes: Length of one performance
        capacity: Seats per performance
        window: Optional season for the show
        performances: Days with a performance scheduled
    """
    name: str
    schedule: str = ""
    duration_minutes: int = 0
    capacity: int = 0
    window: AvailabilityWindow = field(default_factory=AvailabilityWindow)
    performances: Set[date] = field(default_factory=set)

    def __post_init__(self):
        self.performances = {to_day(d) for d in self.performances if d is not None}

    def add_performance(self, day: Optional[DayLike]) -> bool:
        """
        Schedule a performance.

        Returns:
            True if a new performance day was added
        """
        target = to_day(day)
        if target is None or target in self.performances:
            return False
        self.performances.add(target)
        return True

    def cancel_performance(self, day: Optional[DayLike]) -> bool:
        """Cancel the performance on a day, if any."""
        target = to_day(day)
        if target not in self.performances:
            return False
        self.performances.discard(target)
        return True

    def is_available(self, day: Optional[DayLike]) -> bool:
        """A show runs on a day if it is in season and a performance is scheduled."""
        target = to_day(day)
        if target is None or target not in self.performances:
            return False
        return self.window.is_available(target)

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        if isinstance(other, Show):
            return self.name == other.name
        return False
