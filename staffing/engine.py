"""
Staffing Assignment Engine - administrator-facing orchestrator.

Responsibilities:
- Validate assignment requests (arguments, shift, catalogue membership,
  qualifications)
- Keep the park-wide index: day -> shift -> employee -> assignment target
- Keep facility rosters in step with the index
- Answer minimum-staffing, availability and access queries

An employee holds at most one assignment per (day, shift) across the whole
park. The engine is the only writer of that index and of facility rosters.
"""
import logging
import threading
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console

from config import AppConfig, config as default_config, get_logger
from exceptions import (
    AttractionNotFoundError,
    AttractionValidationError,
    StaffingConflictError,
    StaffingNotFoundError,
    StaffingValidationError,
    ValidationError,
)
from models.attraction import Attraction
from models.calendar import DayLike, to_day
from models.employee import Employee
from models.facility import ServicePlace
from models.roster import WorkplaceRoster
from models.shift import Shift
from models.tier import ExclusivityTier
from staffing.catalog import ParkCatalog
from staffing.store import AssignmentStore, InMemoryAssignmentStore
from staffing.targets import (
    AssignmentTarget,
    AttractionTarget,
    Duty,
    ServicePlaceTarget,
    ZoneListTarget,
    describe_target,
)


class StaffingAssignmentEngine:
    """
    Orchestrates staff assignments across attractions, service places and
    general-service zones.

    Every mutating operation validates in a fixed order and raises the first
    failure: missing argument, invalid shift, unknown employee or target,
    unqualified employee, then double assignment.
    """

    def __init__(
        self,
        catalog: ParkCatalog,
        store: Optional[AssignmentStore] = None,
        app_config: Optional[AppConfig] = None
    ):
        """
        Initialize the engine.

        Args:
            catalog: Registered employees, attractions and service places
            store: Backing store for the assignment index (in-memory by default)
            app_config: Application configuration (module config by default)
        """
        self.catalog = catalog
        self.store = store if store is not None else InMemoryAssignmentStore()
        self.config = app_config or default_config
        self.logger = get_logger("staffing")
        self.console = Console()
        self._lock = threading.RLock()

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message (file log always, console in verbose mode).

        Args:
            message: The log message
            level: Log level (info, warning, error, debug, success)
        """
        if self.config.verbose:
            colors = {
                "info": "blue",
                "warning": "yellow",
                "error": "red",
                "debug": "dim",
                "success": "green"
            }
            color = colors.get(level, "white")
            self.console.print(f"[{color}][StaffingEngine] {message}[/{color}]")

        log_level = {
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
            "debug": logging.DEBUG,
            "success": logging.INFO,
        }.get(level, logging.INFO)
        self.logger.log(log_level, message)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _reject(self, error: Exception) -> None:
        self.log(f"Rejected: {error}", "warning")
        raise error

    def _require(self, **arguments: Any) -> None:
        """Reject None arguments and empty strings."""
        for name, value in arguments.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                self._reject(StaffingValidationError(
                    "Arguments must not be null or empty", {"argument": name}
                ))

    def _require_shift(self, shift: Any) -> Shift:
        resolved = Shift.from_label(shift)
        if resolved is None:
            self._reject(StaffingValidationError("Invalid shift", {"shift": shift}))
        return resolved

    def _require_employee(self, employee: Employee) -> Employee:
        if not self.catalog.has_employee(employee):
            self._reject(StaffingNotFoundError(
                "Employee is not registered in the park", {"employee": employee.id}
            ))
        return self.catalog.find_employee(employee.id)

    def _require_attraction(self, attraction: Attraction) -> Attraction:
        if not self.catalog.has_attraction(attraction):
            self._reject(StaffingNotFoundError(
                "Attraction is not registered in the park",
                {"attraction": attraction.name}
            ))
        return self.catalog.find_attraction(attraction.name)

    def _require_service_place(self, place: ServicePlace) -> ServicePlace:
        if not self.catalog.has_service_place(place):
            self._reject(StaffingNotFoundError(
                "Service place is not registered in the park", {"place": place.id}
            ))
        return self.catalog.find_service_place(place.id)

    def _require_free(self, employee: Employee, day: date, shift: Shift) -> None:
        current = self.store.get(day, shift, employee)
        if current is not None:
            self._reject(StaffingConflictError(
                "Employee is already assigned in that shift",
                {
                    "employee": employee.id,
                    "day": day,
                    "shift": shift.value,
                    "assigned_to": describe_target(current),
                }
            ))

    def _qualifications_enforced(self) -> bool:
        return self.config.staffing.enforce_qualifications

    # =========================================================================
    # ASSIGNMENT
    # =========================================================================

    def _commit(
        self,
        employee: Employee,
        day: date,
        shift: Shift,
        target: AssignmentTarget,
        roster: Optional[WorkplaceRoster]
    ) -> AssignmentTarget:
        """Write an assignment to the index and to the facility roster."""
        self.store.put(day, shift, employee, target)
        if roster is not None:
            roster.assign(employee, day, shift)
        self.log(
            f"Assigned {employee.name} to {describe_target(target)} "
            f"on {day} ({shift.value})",
            "success"
        )
        return target

    def _roster_of(self, target: Optional[AssignmentTarget]) -> Optional[WorkplaceRoster]:
        if isinstance(target, AttractionTarget):
            return target.attraction.roster
        if isinstance(target, ServicePlaceTarget):
            return target.place.roster
        return None

    def assign_to_attraction(
        self,
        employee: Employee,
        attraction: Attraction,
        day: Optional[DayLike],
        shift: Any
    ) -> AssignmentTarget:
        """
        Assign an employee to operate an attraction for a shift.

        Args:
            employee: Registered employee
            attraction: Registered mechanical or cultural attraction
            day: Working day
            shift: Shift member or label

        Returns:
            The recorded assignment target

        Raises:
            StaffingValidationError: Missing argument, invalid shift or
                unqualified operator
            StaffingNotFoundError: Employee or attraction not registered
            StaffingConflictError: Employee already assigned that shift
        """
        with self._lock:
            self._require(employee=employee, attraction=attraction, day=day, shift=shift)
            resolved_shift = self._require_shift(shift)
            employee = self._require_employee(employee)
            attraction = self._require_attraction(attraction)
            target_day = to_day(day)

            if self._qualifications_enforced() and not employee.can_operate(attraction, target_day):
                self._reject(StaffingValidationError(
                    "Employee is not qualified to operate this attraction",
                    {"employee": employee.id, "attraction": attraction.name}
                ))

            self._require_free(employee, target_day, resolved_shift)
            return self._commit(
                employee, target_day, resolved_shift,
                AttractionTarget(attraction), attraction.roster
            )

    def assign_cook_to_cafeteria(
        self,
        cook: Employee,
        cafeteria: ServicePlace,
        day: Optional[DayLike],
        shift: Any
    ) -> AssignmentTarget:
        """
        Assign a trained cook to a cafeteria kitchen.

        Raises:
            StaffingValidationError: Missing argument, invalid shift, place
                is not a cafeteria or the cook is not trained
            StaffingNotFoundError: Cook or cafeteria not registered
            StaffingConflictError: Cook already assigned that shift
        """
        with self._lock:
            self._require(cook=cook, cafeteria=cafeteria, day=day, shift=shift)
            resolved_shift = self._require_shift(shift)
            cook = self._require_employee(cook)
            cafeteria = self._require_service_place(cafeteria)
            target_day = to_day(day)

            if not cafeteria.requires_cook:
                self._reject(StaffingValidationError(
                    "Cooks can only be assigned to cafeterias",
                    {"place": cafeteria.id, "kind": cafeteria.kind.value}
                ))
            if self._qualifications_enforced() and not cook.can_cook():
                self._reject(StaffingValidationError(
                    "Cook is not trained", {"employee": cook.id}
                ))

            self._require_free(cook, target_day, resolved_shift)
            return self._commit(
                cook, target_day, resolved_shift,
                ServicePlaceTarget(cafeteria, Duty.COOK), cafeteria.roster
            )

    def assign_cashier_to_service_place(
        self,
        cashier: Employee,
        place: ServicePlace,
        day: Optional[DayLike],
        shift: Any
    ) -> AssignmentTarget:
        """
        Assign an employee to the till of a cafeteria, ticket booth or shop.

        Raises:
            StaffingValidationError: Missing argument, invalid shift or the
                employee cannot work cash
            StaffingNotFoundError: Employee or place not registered
            StaffingConflictError: Employee already assigned that shift
        """
        with self._lock:
            self._require(cashier=cashier, place=place, day=day, shift=shift)
            resolved_shift = self._require_shift(shift)
            cashier = self._require_employee(cashier)
            place = self._require_service_place(place)
            target_day = to_day(day)

            if self._qualifications_enforced() and not cashier.can_work_cash():
                self._reject(StaffingValidationError(
                    "Employee cannot work cash", {"employee": cashier.id}
                ))

            self._require_free(cashier, target_day, resolved_shift)
            return self._commit(
                cashier, target_day, resolved_shift,
                ServicePlaceTarget(place, Duty.CASHIER), place.roster
            )

    def assign_to_general_service(
        self,
        employee: Employee,
        zones: Optional[Sequence[str]],
        day: Optional[DayLike],
        shift: Any
    ) -> AssignmentTarget:
        """
        Assign an employee to general service across one or more zones.

        Zones are not facilities, so only the park-wide index is written.

        Raises:
            StaffingValidationError: Missing argument, empty zone list or
                invalid shift
            StaffingNotFoundError: Employee not registered
            StaffingConflictError: Employee already assigned that shift
        """
        with self._lock:
            self._require(employee=employee, zones=zones, day=day, shift=shift)
            if isinstance(zones, str):
                zones = [zones]
            cleaned = tuple(str(z).strip() for z in zones if z is not None and str(z).strip())
            if not cleaned:
                self._reject(StaffingValidationError(
                    "Zone list must not be empty", {"employee": employee.id}
                ))
            resolved_shift = self._require_shift(shift)
            employee = self._require_employee(employee)
            target_day = to_day(day)

            self._require_free(employee, target_day, resolved_shift)
            return self._commit(
                employee, target_day, resolved_shift, ZoneListTarget(cleaned), None
            )

    def release_assignment(
        self,
        employee: Employee,
        day: Optional[DayLike],
        shift: Any
    ) -> bool:
        """
        Remove an employee's assignment for a (day, shift).

        The index entry and the facility roster entry are removed together.

        Returns:
            True if an assignment was removed, False if there was none

        Raises:
            StaffingValidationError: Missing argument or invalid shift
        """
        with self._lock:
            self._require(employee=employee, day=day, shift=shift)
            resolved_shift = self._require_shift(shift)
            target_day = to_day(day)

            target = self.store.get(target_day, resolved_shift, employee)
            removed = self.store.delete(target_day, resolved_shift, employee)
            if removed:
                roster = self._roster_of(target)
                if roster is not None:
                    roster.remove(employee, target_day, resolved_shift)
                self.log(f"Released {employee.name} on {target_day} ({resolved_shift.value})")
            else:
                self.log(
                    f"No assignment to release for {employee.name} "
                    f"on {target_day} ({resolved_shift.value})",
                    "debug"
                )
            return removed

    # =========================================================================
    # STAFFING QUERIES
    # =========================================================================

    def meets_minimum_staffing(
        self,
        attraction: Optional[Attraction],
        day: Optional[DayLike],
        shift: Any
    ) -> bool:
        """
        Check if an attraction has its required staff for a shift.

        Returns:
            False for missing arguments, an invalid shift or a shift with
            no assignments at all; otherwise assigned count >= required_staff
        """
        target_day = to_day(day)
        resolved_shift = Shift.from_label(shift)
        if attraction is None or target_day is None or resolved_shift is None:
            return False

        with self._lock:
            entries = list(self.store.iterate(target_day, resolved_shift))

        if not entries:
            return False

        assigned = sum(
            1 for _, target in entries
            if isinstance(target, AttractionTarget) and target.attraction == attraction
        )
        self.log(
            f"{attraction.name} on {target_day} ({resolved_shift.value}): "
            f"{assigned}/{attraction.required_staff} staff",
            "debug"
        )
        return assigned >= attraction.required_staff

    def duty_count(
        self,
        place: Optional[ServicePlace],
        day: Optional[DayLike],
        shift: Any,
        duty: Duty
    ) -> int:
        """Count index entries for a duty at a service place."""
        target_day = to_day(day)
        resolved_shift = Shift.from_label(shift)
        if place is None or target_day is None or resolved_shift is None:
            return 0

        with self._lock:
            entries = list(self.store.iterate(target_day, resolved_shift))

        return sum(
            1 for _, target in entries
            if isinstance(target, ServicePlaceTarget)
            and target.place == place
            and target.duty == duty
        )

    def facility_meets_minimum_staffing(
        self,
        place: Optional[ServicePlace],
        day: Optional[DayLike],
        shift: Any
    ) -> bool:
        """
        Check the per-type staffing rule of a service place.

        Cafeterias need cooks and cashiers; ticket booths and shops need
        cashiers. Minimums come from the staffing configuration.
        """
        if place is None or to_day(day) is None or Shift.from_label(shift) is None:
            return False

        staffing = self.config.staffing
        cashiers = self.duty_count(place, day, shift, Duty.CASHIER)
        if cashiers < staffing.min_cashiers_per_place:
            return False

        if place.requires_cook:
            cooks = self.duty_count(place, day, shift, Duty.COOK)
            return cooks >= staffing.min_cooks_per_cafeteria

        return True

    # =========================================================================
    # READ QUERIES
    # =========================================================================

    def is_assigned(self, employee: Optional[Employee], day: Optional[DayLike], shift: Any) -> bool:
        return self.assignment_target_of(employee, day, shift) is not None

    def assignment_target_of(
        self,
        employee: Optional[Employee],
        day: Optional[DayLike],
        shift: Any
    ) -> Optional[AssignmentTarget]:
        """Get where an employee works for a (day, shift), or None."""
        target_day = to_day(day)
        resolved_shift = Shift.from_label(shift)
        if employee is None or target_day is None or resolved_shift is None:
            return None
        with self._lock:
            return self.store.get(target_day, resolved_shift, employee)

    def employees_on_shift(self, day: Optional[DayLike], shift: Any) -> List[Employee]:
        """Get every employee assigned anywhere in the park for a (day, shift)."""
        target_day = to_day(day)
        resolved_shift = Shift.from_label(shift)
        if target_day is None or resolved_shift is None:
            return []
        with self._lock:
            return [employee for employee, _ in self.store.iterate(target_day, resolved_shift)]

    def assignments_on(self, day: Optional[DayLike], shift: Any) -> Dict[Employee, AssignmentTarget]:
        """Get the (employee -> target) entries of a (day, shift)."""
        target_day = to_day(day)
        resolved_shift = Shift.from_label(shift)
        if target_day is None or resolved_shift is None:
            return {}
        with self._lock:
            return dict(self.store.iterate(target_day, resolved_shift))

    # =========================================================================
    # ATTRACTION ADMINISTRATION
    # =========================================================================

    def _require_registered_attraction(self, attraction: Attraction) -> Attraction:
        if not self.catalog.has_attraction(attraction):
            self._reject(AttractionNotFoundError(
                "Attraction is not registered in the park",
                {"attraction": attraction.name}
            ))
        return self.catalog.find_attraction(attraction.name)

    def schedule_maintenance(
        self,
        attraction: Attraction,
        start: Optional[DayLike],
        end: Optional[DayLike]
    ) -> int:
        """
        Close an attraction for maintenance from start to end inclusive.

        Returns:
            Number of newly blacked-out days

        Raises:
            AttractionValidationError: Missing argument or start after end
            AttractionNotFoundError: Attraction not registered
        """
        with self._lock:
            first = to_day(start)
            last = to_day(end)
            if attraction is None or first is None or last is None:
                self._reject(AttractionValidationError(
                    "Attraction and dates must not be null"
                ))
            if first > last:
                self._reject(AttractionValidationError(
                    "Maintenance start is after its end",
                    {"start": first, "end": last}
                ))
            attraction = self._require_registered_attraction(attraction)

            added = attraction.schedule_maintenance(first, last)
            self.log(
                f"Scheduled maintenance for {attraction.name} from {first} to {last} "
                f"({added} new day(s))"
            )
            return added

    def set_attraction_season(
        self,
        attraction: Attraction,
        seasonal: bool,
        start: Optional[DayLike] = None,
        end: Optional[DayLike] = None
    ) -> None:
        """
        Make an attraction seasonal or all-year.

        Raises:
            AttractionValidationError: Missing attraction, or seasonal with
                missing or reversed bounds
            AttractionNotFoundError: Attraction not registered
        """
        with self._lock:
            if attraction is None:
                self._reject(AttractionValidationError("Attraction must not be null"))
            attraction = self._require_registered_attraction(attraction)

            try:
                attraction.window.set_season(seasonal, start, end)
            except ValidationError as e:
                error = AttractionValidationError(e.message, dict(e.context))
                self.log(f"Rejected: {error}", "warning")
                raise error from e

            if seasonal:
                self.log(f"{attraction.name} now seasonal from {to_day(start)} to {to_day(end)}")
            else:
                self.log(f"{attraction.name} now open all year")

    def change_attraction_tier(self, attraction: Attraction, tier: Any) -> None:
        """
        Change the exclusivity tier of an attraction.

        Raises:
            AttractionValidationError: Missing attraction or invalid tier
            AttractionNotFoundError: Attraction not registered
        """
        with self._lock:
            if attraction is None:
                self._reject(AttractionValidationError("Attraction must not be null"))
            resolved = ExclusivityTier.from_string(tier)
            if resolved is None:
                self._reject(AttractionValidationError(
                    "Invalid exclusivity tier", {"tier": tier}
                ))
            attraction = self._require_registered_attraction(attraction)

            attraction.exclusivity = resolved
            self.log(f"{attraction.name} exclusivity set to {resolved.value}")

    def is_attraction_available(self, attraction: Optional[Attraction], day: Optional[DayLike]) -> bool:
        """Check if a registered attraction is open on a day (False otherwise)."""
        if attraction is None or not self.catalog.has_attraction(attraction):
            return False
        return self.catalog.find_attraction(attraction.name).is_available(day)

    def attraction_calendar(
        self,
        start: Optional[DayLike],
        end: Optional[DayLike]
    ) -> Dict[str, List[date]]:
        """Get the open days of every registered attraction in a range."""
        return {
            attraction.name: attraction.window.available_days(start, end)
            for attraction in self.catalog.attractions()
        }

    # =========================================================================
    # TICKETS
    # =========================================================================

    def check_access(self, ticket: Any, attraction: Optional[Attraction], on: Optional[DayLike] = None) -> bool:
        """
        Decide entry of a ticket to an attraction on a day (today by default).

        The attraction must be open that day and the ticket must grant
        access. Never raises.
        """
        if ticket is None or attraction is None:
            return False
        day = to_day(on) or date.today()
        if not attraction.is_available(day):
            self.log(f"{attraction.name} is closed on {day}", "debug")
            return False
        return ticket.can_access(attraction, day)

    def grant_employee_discount(self, ticket: Any, employee: Employee) -> None:
        """
        Apply the employee discount to a ticket.

        Raises:
            StaffingValidationError: Missing ticket or employee
            StaffingNotFoundError: Employee not registered
        """
        with self._lock:
            self._require(ticket=ticket, employee=employee)
            employee = self._require_employee(employee)
            ticket.apply_employee_discount()
            self.log(f"Employee discount applied to ticket {ticket.id} for {employee.name}")
