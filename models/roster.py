"""
Workplace roster model.

Every attraction and service place keeps its own day -> shift -> staff
roster. The roster holds references to employees, it never owns them.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from models.calendar import DayLike, to_day
from models.shift import Shift


@dataclass
class WorkplaceRoster:
    """
    Per-facility record of who works when.

    Attributes:
        entries: Mapping day -> shift -> employees in assignment order
    """
    entries: Dict[date, Dict[Shift, List[Any]]] = field(default_factory=dict)

    def assign(self, employee: Any, day: Optional[DayLike], shift: Any) -> bool:
        """
        Put an employee on the roster for a day and shift.

        Args:
            employee: Employee to roster
            day: Working day
            shift: Shift member or label

        Returns:
            False if any argument is None or the shift is invalid,
            True otherwise (also when the employee was already rostered)
        """
        target_day = to_day(day)
        target_shift = Shift.from_label(shift)
        if employee is None or target_day is None or target_shift is None:
            return False

        staff = self.entries.setdefault(target_day, {}).setdefault(target_shift, [])
        if employee not in staff:
            staff.append(employee)
        return True

    def remove(self, employee: Any, day: Optional[DayLike], shift: Any) -> bool:
        """
        Take an employee off the roster for a day and shift.

        Only the staffing engine calls this, when it releases an assignment.

        Returns:
            True if the employee was rostered and has been removed
        """
        target_day = to_day(day)
        target_shift = Shift.from_label(shift)
        if employee is None or target_day is None or target_shift is None:
            return False

        shifts = self.entries.get(target_day, {})
        staff = shifts.get(target_shift, [])
        if employee not in staff:
            return False

        staff.remove(employee)
        if not staff:
            del shifts[target_shift]
        if not shifts:
            del self.entries[target_day]
        return True

    def employees_on(self, day: Optional[DayLike], shift: Any) -> List[Any]:
        """Get a copy of the staff rostered for a day and shift (never None)."""
        target_day = to_day(day)
        target_shift = Shift.from_label(shift)
        if target_day is None or target_shift is None:
            return []
        return list(self.entries.get(target_day, {}).get(target_shift, []))

    def is_rostered(self, employee: Any, day: Optional[DayLike], shift: Any) -> bool:
        return employee is not None and employee in self.employees_on(day, shift)

    def days(self) -> List[date]:
        return sorted(self.entries)

    def __len__(self) -> int:
        return sum(
            len(staff)
            for shifts in self.entries.values()
            for staff in shifts.values()
        )
