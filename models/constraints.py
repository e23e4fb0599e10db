"""
Constraint models for park staffing checks.
Defines the violations a staffing sweep can report and how they are scored.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ConstraintType(Enum):
    """Categories of constraints."""

    # Hard constraints (must satisfy)
    MIN_STAFF = "min_staff"            # Facility below its staffing rule
    QUALIFICATION = "qualification"    # Employee not qualified for the post

    # Soft constraints (should fix)
    AVAILABILITY = "availability"      # Staff on a closed attraction
    COVERAGE = "coverage"              # Facility with nobody at all


HARD_CONSTRAINTS = {ConstraintType.MIN_STAFF, ConstraintType.QUALIFICATION}


@dataclass
class Violation:
    """
    Represents a constraint violation.

    Attributes:
        constraint_type: Type of constraint violated
        severity: 1-10, where 10 is most severe
        description: Human-readable description
        affected_entity: Attraction name, service place id or employee id
        affected_date: Day of the violation
        shift: Shift label of the violation
        details: Additional details about the violation
    """
    constraint_type: ConstraintType
    severity: int
    description: str
    affected_entity: str
    affected_date: Optional[date] = None
    shift: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def is_hard_constraint(self) -> bool:
        """Check if this is a hard constraint violation."""
        return self.constraint_type in HARD_CONSTRAINTS

    def __str__(self) -> str:
        when = f" on {self.affected_date} ({self.shift})" if self.affected_date else ""
        return f"[{self.constraint_type.value.upper()}] {self.description}{when}"


@dataclass
class ComplianceResult:
    """
    Result of a staffing compliance check.

    Attributes:
        is_compliant: Whether all hard constraints pass
        violations: Hard constraint violations
        warnings: Soft constraint violations
        score: Overall compliance score (0-100)
        checked_at: When the check was performed
    """
    is_compliant: bool = True
    violations: List[Violation] = field(default_factory=list)
    warnings: List[Violation] = field(default_factory=list)
    score: float = 100.0
    checked_at: datetime = field(default_factory=datetime.now)

    def add_violation(self, violation: Violation) -> None:
        """
        Add a violation to the appropriate list and lower the score.

        Hard violations cost severity * 2 points, soft ones severity * 0.5.
        """
        if violation.is_hard_constraint():
            self.violations.append(violation)
            self.is_compliant = False
            self.score = max(0, self.score - violation.severity * 2)
        else:
            self.warnings.append(violation)
            self.score = max(0, self.score - violation.severity * 0.5)

    def get_critical_violations(self) -> List[Violation]:
        """Get violations with severity >= 8."""
        return [v for v in self.violations if v.severity >= 8]

    def by_type(self, constraint_type: ConstraintType) -> List[Violation]:
        return [
            v for v in self.violations + self.warnings
            if v.constraint_type == constraint_type
        ]

    def summary(self) -> dict:
        """Get a summary of the compliance result."""
        return {
            "is_compliant": self.is_compliant,
            "hard_violations": len(self.violations),
            "soft_violations": len(self.warnings),
            "score": self.score,
            "critical_count": len(self.get_critical_violations()),
        }

    def __str__(self) -> str:
        status = "COMPLIANT" if self.is_compliant else "NON-COMPLIANT"
        return (
            f"{status} | Score: {self.score:.1f}/100 | "
            f"Violations: {len(self.violations)} hard, {len(self.warnings)} soft"
        )
