"""
Data models for the park operations core.
"""
from .calendar import to_day, same_day, days_in_range, parse_day, format_day
from .shift import Shift
from .tier import ExclusivityTier
from .availability import AvailabilityWindow
from .roster import WorkplaceRoster
from .attraction import Attraction, AttractionKind, RiskLevel, Show
from .facility import ServicePlace, ServicePlaceKind
from .employee import Employee, EmployeeRole
from .ticket import (
    AccessChecker,
    Ticket,
    BasicTicket,
    SeasonalTicket,
    SingleAttractionTicket,
    FastPass
)
from .constraints import ConstraintType, Violation, ComplianceResult

__all__ = [
    "to_day", "same_day", "days_in_range", "parse_day", "format_day",
    "Shift", "ExclusivityTier", "AvailabilityWindow", "WorkplaceRoster",
    "Attraction", "AttractionKind", "RiskLevel", "Show",
    "ServicePlace", "ServicePlaceKind",
    "Employee", "EmployeeRole",
    "AccessChecker", "Ticket", "BasicTicket", "SeasonalTicket",
    "SingleAttractionTicket", "FastPass",
    "ConstraintType", "Violation", "ComplianceResult"
]
