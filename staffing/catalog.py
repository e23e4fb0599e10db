"""
Park catalogue.

Lookups the staffing engine needs to resolve employees, attractions and
service places. Full catalogue management lives outside this core.
"""
from typing import Dict, List, Optional, Protocol

from exceptions import ValidationError
from models.attraction import Attraction
from models.employee import Employee
from models.facility import ServicePlace


class ParkCatalog(Protocol):
    """Read interface over the park's registered entities."""

    def has_employee(self, employee: Employee) -> bool:
        ...

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        ...

    def has_attraction(self, attraction: Attraction) -> bool:
        ...

    def find_attraction(self, name: str) -> Optional[Attraction]:
        ...

    def has_service_place(self, place: ServicePlace) -> bool:
        ...

    def find_service_place(self, place_id: str) -> Optional[ServicePlace]:
        ...

    def employees(self) -> List[Employee]:
        ...

    def attractions(self) -> List[Attraction]:
        ...

    def service_places(self) -> List[ServicePlace]:
        ...


class InMemoryCatalog:
    """
    Dict-backed catalogue.

    Employees are keyed by id, attractions by name and service places by id.
    """

    def __init__(
        self,
        employees: Optional[List[Employee]] = None,
        attractions: Optional[List[Attraction]] = None,
        service_places: Optional[List[ServicePlace]] = None
    ):
        self._employees: Dict[str, Employee] = {}
        self._attractions: Dict[str, Attraction] = {}
        self._service_places: Dict[str, ServicePlace] = {}

        for employee in employees or []:
            self.add_employee(employee)
        for attraction in attractions or []:
            self.add_attraction(attraction)
        for place in service_places or []:
            self.add_service_place(place)

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_employee(self, employee: Employee) -> None:
        """
        Register an employee.

        Raises:
            ValidationError: If the employee is None or the id is taken
        """
        if employee is None or not employee.id:
            raise ValidationError("Employee must have an id")
        if employee.id in self._employees:
            raise ValidationError("Duplicate employee id", {"employee": employee.id})
        self._employees[employee.id] = employee

    def add_attraction(self, attraction: Attraction) -> None:
        if attraction is None or not attraction.name:
            raise ValidationError("Attraction must have a name")
        if attraction.name in self._attractions:
            raise ValidationError("Duplicate attraction name", {"attraction": attraction.name})
        self._attractions[attraction.name] = attraction

    def add_service_place(self, place: ServicePlace) -> None:
        if place is None or not place.id:
            raise ValidationError("Service place must have an id")
        if place.id in self._service_places:
            raise ValidationError("Duplicate service place id", {"place": place.id})
        self._service_places[place.id] = place

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def has_employee(self, employee: Employee) -> bool:
        return employee is not None and self._employees.get(employee.id) == employee

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get(employee_id)

    def has_attraction(self, attraction: Attraction) -> bool:
        return attraction is not None and self._attractions.get(attraction.name) == attraction

    def find_attraction(self, name: str) -> Optional[Attraction]:
        return self._attractions.get(name)

    def has_service_place(self, place: ServicePlace) -> bool:
        return place is not None and self._service_places.get(place.id) == place

    def find_service_place(self, place_id: str) -> Optional[ServicePlace]:
        return self._service_places.get(place_id)

    def employees(self) -> List[Employee]:
        return list(self._employees.values())

    def attractions(self) -> List[Attraction]:
        return list(self._attractions.values())

    def service_places(self) -> List[ServicePlace]:
        return list(self._service_places.values())
