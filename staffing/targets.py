"""
Assignment targets.

An employee on shift works at exactly one of: an attraction, a duty at a
service place, or a list of general-service zones. ``AssignmentTarget`` is
the union of the three; helpers dispatch on it exhaustively.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from models.attraction import Attraction
from models.facility import ServicePlace


class Duty(Enum):
    """What an employee does at a service place."""
    COOK = "Cook"
    CASHIER = "Cashier"


@dataclass(frozen=True)
class AttractionTarget:
    attraction: Attraction


@dataclass(frozen=True)
class ServicePlaceTarget:
    place: ServicePlace
    duty: Duty


@dataclass(frozen=True)
class ZoneListTarget:
    zones: Tuple[str, ...]


AssignmentTarget = Union[AttractionTarget, ServicePlaceTarget, ZoneListTarget]


def target_kind(target: AssignmentTarget) -> str:
    """Short label of the target variant ("attraction", "service_place", "zones")."""
    if isinstance(target, AttractionTarget):
        return "attraction"
    if isinstance(target, ServicePlaceTarget):
        return "service_place"
    if isinstance(target, ZoneListTarget):
        return "zones"
    raise TypeError(f"Unknown assignment target: {target!r}")


def describe_target(target: AssignmentTarget) -> str:
    """Human-readable description of where the employee works."""
    if isinstance(target, AttractionTarget):
        return target.attraction.name
    if isinstance(target, ServicePlaceTarget):
        return f"{target.place.name} ({target.duty.value})"
    if isinstance(target, ZoneListTarget):
        return "Zones: " + ", ".join(target.zones)
    raise TypeError(f"Unknown assignment target: {target!r}")
