"""
Employee data model.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from models.calendar import DayLike, to_day


class EmployeeRole(Enum):
    """Employee roles in the park."""
    HIGH_RISK_OPERATOR = "High-Risk Operator"
    MEDIUM_RISK_OPERATOR = "Medium-Risk Operator"
    CASHIER = "Cashier"
    COOK = "Cook"
    REGULAR = "Regular"
    GENERAL_SERVICE = "General Service"


@dataclass
class Employee:
    """
    Employee model representing a park staff member.

    Attributes:
        id: Unique employee identifier
        name: Full name
        role: What the employee is hired to do
        email: Contact address
        overtime: Whether the employee accepts overtime
        trained: Kitchen training (cooks) or high-risk ride training (operators)
        certified_until: Expiry of a medium-risk operator's certification
        can_cover_cash: Regular employees who may work a till
    """
    id: str
    name: str
    role: EmployeeRole = EmployeeRole.REGULAR
    email: str = ""
    overtime: bool = False
    trained: bool = False
    certified_until: Optional[date] = None
    can_cover_cash: bool = False

    def __post_init__(self):
        self.certified_until = to_day(self.certified_until)

    def is_certified_on(self, day: Optional[DayLike]) -> bool:
        """Check if a medium-risk certification is still valid on a day."""
        target = to_day(day)
        if target is None or self.certified_until is None:
            return False
        return target <= self.certified_until

    def can_operate(self, attraction: Any, day: Optional[DayLike] = None) -> bool:
        """
        Check if the employee may staff an attraction.

        High-risk rides need a trained high-risk operator. Medium-risk rides
        also accept a medium-risk operator certified on that day. Any other
        attraction accepts anyone.

        Args:
            attraction: Attraction to staff
            day: Working day (defaults to today for the certification check)

        Returns:
            True if the employee is qualified
        """
        if attraction is None:
            return False

        if getattr(attraction, "is_high_risk", False):
            return self.role == EmployeeRole.HIGH_RISK_OPERATOR and self.trained

        if getattr(attraction, "is_medium_risk", False):
            if self.role == EmployeeRole.HIGH_RISK_OPERATOR:
                return True
            if self.role == EmployeeRole.MEDIUM_RISK_OPERATOR:
                return self.is_certified_on(day or date.today())
            return False

        return True

    def can_cook(self) -> bool:
        return self.role == EmployeeRole.COOK and self.trained

    def can_work_cash(self) -> bool:
        """Cashiers and cooks work the till; regular staff only if flagged."""
        if self.role in (EmployeeRole.CASHIER, EmployeeRole.COOK):
            return True
        return self.role == EmployeeRole.REGULAR and self.can_cover_cash

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value})"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Employee):
            return self.id == other.id
        return False
