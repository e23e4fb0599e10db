"""
Staffing assignment for the park: targets, index store, catalogue,
engine, compliance sweep and roster output.
"""
from .targets import (
    Duty,
    AttractionTarget,
    ServicePlaceTarget,
    ZoneListTarget,
    AssignmentTarget,
    describe_target,
    target_kind
)
from .store import AssignmentStore, InMemoryAssignmentStore
from .catalog import ParkCatalog, InMemoryCatalog
from .engine import StaffingAssignmentEngine
from .validator import StaffingValidator
from .roster_export import roster_dataframe, export_roster_excel, print_roster

__all__ = [
    "Duty", "AttractionTarget", "ServicePlaceTarget", "ZoneListTarget",
    "AssignmentTarget", "describe_target", "target_kind",
    "AssignmentStore", "InMemoryAssignmentStore",
    "ParkCatalog", "InMemoryCatalog",
    "StaffingAssignmentEngine",
    "StaffingValidator",
    "roster_dataframe", "export_roster_excel", "print_roster"
]
