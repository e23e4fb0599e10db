"""
Assignment store.

The staffing engine keeps its park-wide (day, shift, employee) -> target
index behind this narrow interface so storage can be swapped without
touching the engine.
"""
from datetime import date
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from models.employee import Employee
from models.shift import Shift
from staffing.targets import AssignmentTarget


class AssignmentStore(Protocol):
    """Storage contract used by the staffing engine."""

    def get(self, day: date, shift: Shift, employee: Employee) -> Optional[AssignmentTarget]:
        ...

    def put(self, day: date, shift: Shift, employee: Employee, target: AssignmentTarget) -> None:
        ...

    def delete(self, day: date, shift: Shift, employee: Employee) -> bool:
        ...

    def iterate(self, day: date, shift: Shift) -> Iterator[Tuple[Employee, AssignmentTarget]]:
        ...

    def days(self) -> List[date]:
        ...


class InMemoryAssignmentStore:
    """Nested-dict store: day -> shift -> employee -> target."""

    def __init__(self):
        self._index: Dict[date, Dict[Shift, Dict[Employee, AssignmentTarget]]] = {}

    def get(self, day: date, shift: Shift, employee: Employee) -> Optional[AssignmentTarget]:
        return self._index.get(day, {}).get(shift, {}).get(employee)

    def put(self, day: date, shift: Shift, employee: Employee, target: AssignmentTarget) -> None:
        self._index.setdefault(day, {}).setdefault(shift, {})[employee] = target

    def delete(self, day: date, shift: Shift, employee: Employee) -> bool:
        """Remove an entry; returns False when there was none."""
        entries = self._index.get(day, {}).get(shift)
        if not entries or employee not in entries:
            return False
        del entries[employee]
        return True

    def iterate(self, day: date, shift: Shift) -> Iterator[Tuple[Employee, AssignmentTarget]]:
        # Snapshot so callers may mutate the store while iterating
        entries = list(self._index.get(day, {}).get(shift, {}).items())
        return iter(entries)

    def days(self) -> List[date]:
        return sorted(
            day for day, shifts in self._index.items()
            if any(shifts.values())
        )

    def __len__(self) -> int:
        return sum(
            len(entries)
            for shifts in self._index.values()
            for entries in shifts.values()
        )
