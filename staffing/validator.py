"""
Staffing Validator - sweeps the park for staffing gaps.
"""
from datetime import date
from typing import Iterable, List, Optional

from config import get_logger
from models.constraints import ComplianceResult, ConstraintType, Violation
from models.shift import Shift
from staffing.engine import StaffingAssignmentEngine
from staffing.targets import AttractionTarget, Duty


class StaffingValidator:
    """
    Checks every registered facility against its staffing rule.

    Reports:
    - MIN_STAFF: open attraction below required staff, cafeteria without a
      cook or cashier, ticket booth or shop without a cashier
    - AVAILABILITY: staff assigned to an attraction that is closed that day
    """

    def __init__(self):
        self.logger = get_logger("validator")

    def validate(
        self,
        engine: StaffingAssignmentEngine,
        days: Iterable[date],
        shifts: Optional[List[Shift]] = None
    ) -> ComplianceResult:
        """
        Validate staffing for a set of days.

        Args:
            engine: Engine holding the assignments
            days: Days to check
            shifts: Shifts to check (all shifts by default)

        Returns:
            ComplianceResult with all violations
        """
        shifts = shifts or list(Shift)
        result = ComplianceResult(is_compliant=True)

        for day in days:
            for shift in shifts:
                self._check_attractions(engine, day, shift, result)
                self._check_service_places(engine, day, shift, result)

        self.logger.info(f"Staffing validation: {result}")
        return result

    def _check_attractions(
        self,
        engine: StaffingAssignmentEngine,
        day: date,
        shift: Shift,
        result: ComplianceResult
    ) -> None:
        assignments = engine.assignments_on(day, shift)

        for attraction in engine.catalog.attractions():
            assigned = [
                employee for employee, target in assignments.items()
                if isinstance(target, AttractionTarget) and target.attraction == attraction
            ]

            if not attraction.is_available(day):
                # Closed attractions need no staff
                if assigned:
                    result.add_violation(Violation(
                        constraint_type=ConstraintType.AVAILABILITY,
                        severity=4,
                        description=f"{len(assigned)} staff assigned to closed attraction {attraction.name}",
                        affected_entity=attraction.name,
                        affected_date=day,
                        shift=shift.value,
                        details={"employees": [e.id for e in assigned]}
                    ))
                continue

            if not engine.meets_minimum_staffing(attraction, day, shift):
                result.add_violation(Violation(
                    constraint_type=ConstraintType.MIN_STAFF,
                    severity=9 if attraction.is_high_risk else 7,
                    description=(
                        f"{attraction.name} has {len(assigned)} of "
                        f"{attraction.required_staff} required staff"
                    ),
                    affected_entity=attraction.name,
                    affected_date=day,
                    shift=shift.value,
                    details={
                        "assigned": len(assigned),
                        "required": attraction.required_staff,
                    }
                ))

    def _check_service_places(
        self,
        engine: StaffingAssignmentEngine,
        day: date,
        shift: Shift,
        result: ComplianceResult
    ) -> None:
        for place in engine.catalog.service_places():
            if engine.facility_meets_minimum_staffing(place, day, shift):
                continue

            cooks = engine.duty_count(place, day, shift, Duty.COOK)
            cashiers = engine.duty_count(place, day, shift, Duty.CASHIER)
            missing = []
            if place.requires_cook and cooks < engine.config.staffing.min_cooks_per_cafeteria:
                missing.append("cook")
            if cashiers < engine.config.staffing.min_cashiers_per_place:
                missing.append("cashier")

            result.add_violation(Violation(
                constraint_type=ConstraintType.MIN_STAFF,
                severity=6,
                description=f"{place.name} is missing: {', '.join(missing)}",
                affected_entity=place.id,
                affected_date=day,
                shift=shift.value,
                details={"cooks": cooks, "cashiers": cashiers, "missing": missing}
            ))
