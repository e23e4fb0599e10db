"""
Attraction availability model.

Merges a seasonal operating window with maintenance blackout days.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Set

from exceptions import ValidationError
from models.calendar import DayLike, days_in_range, to_day


@dataclass
class AvailabilityWindow:
    """
    When an attraction is open.

    Attributes:
        seasonal: Whether the attraction only runs inside [start, end]
        start: First open day of the season (inclusive)
        end: Last open day of the season (inclusive)
        blackout_days: Maintenance days; only ever grows
    """
    seasonal: bool = False
    start: Optional[date] = None
    end: Optional[date] = None
    blackout_days: Set[date] = field(default_factory=set)

    def __post_init__(self):
        self.start = to_day(self.start)
        self.end = to_day(self.end)
        self.blackout_days = {to_day(d) for d in self.blackout_days if d is not None}

    def is_available(self, day: Optional[DayLike]) -> bool:
        """
        Check if the attraction is open on a day.

        Blackouts are checked first, then the season.

        Args:
            day: Day to check (timestamps are truncated)

        Returns:
            False for None, blacked-out days and days outside the season
        """
        target = to_day(day)
        if target is None:
            return False

        if target in self.blackout_days:
            return False

        if self.seasonal:
            if self.start is None or self.end is None:
                return False
            return self.start <= target <= self.end

        return True

    def schedule_maintenance(self, start: Optional[DayLike], end: Optional[DayLike]) -> int:
        """
        Black out every day from start to end inclusive.

        A reversed or incomplete range adds nothing.

        Returns:
            Number of days that were not already blacked out
        """
        added = 0
        for day in days_in_range(start, end):
            if day not in self.blackout_days:
                self.blackout_days.add(day)
                added += 1
        return added

    def set_season(
        self,
        seasonal: bool,
        start: Optional[DayLike] = None,
        end: Optional[DayLike] = None
    ) -> None:
        """
        Change the seasonal flag and bounds.

        Raises:
            ValidationError: If a seasonal window has missing or reversed bounds
        """
        first = to_day(start)
        last = to_day(end)
        if seasonal:
            if first is None or last is None:
                raise ValidationError(
                    "Seasonal window needs both start and end",
                    {"start": first, "end": last}
                )
            if first > last:
                raise ValidationError(
                    "Season start is after season end",
                    {"start": first, "end": last}
                )

        self.seasonal = seasonal
        self.start = first
        self.end = last

    def available_days(self, start: Optional[DayLike], end: Optional[DayLike]) -> List[date]:
        """Get the open days in an inclusive range."""
        return [day for day in days_in_range(start, end) if self.is_available(day)]

    def __str__(self) -> str:
        season = f"{self.start} to {self.end}" if self.seasonal else "all year"
        return f"Open {season}, {len(self.blackout_days)} blackout day(s)"
