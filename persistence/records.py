"""
Flat-file records for the park core.

One entity per line, fields separated by ``|``, days as ``yyyy-MM-dd``,
missing values as ``null`` and lists joined with ``,``. Files carry no
header row. Reading and writing go through pandas.

A backslash escapes the next character inside a list, so list items may
contain the separator. Text whose value is the null token itself, or that
starts with a backslash, is written with one leading backslash.
"""
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from config import PersistenceConfig, config, get_logger
from exceptions import PersistenceError
from models.attraction import Attraction, AttractionKind, RiskLevel
from models.availability import AvailabilityWindow
from models.calendar import format_day, parse_day
from models.employee import Employee, EmployeeRole
from models.facility import ServicePlace, ServicePlaceKind
from models.shift import Shift
from models.ticket import (
    BasicTicket,
    FastPass,
    SeasonalTicket,
    SingleAttractionTicket,
    Ticket,
)
from models.tier import ExclusivityTier
from staffing.catalog import ParkCatalog
from staffing.engine import StaffingAssignmentEngine
from staffing.targets import (
    AssignmentTarget,
    AttractionTarget,
    Duty,
    ServicePlaceTarget,
    ZoneListTarget,
)

EMPLOYEE_FILE = "employees.txt"
ATTRACTION_FILE = "attractions.txt"
SERVICE_PLACE_FILE = "service_places.txt"
TICKET_FILE = "tickets.txt"
ASSIGNMENT_FILE = "assignments.txt"
FAST_PASS_FILE = "fast_passes.txt"

EMPLOYEE_COLUMNS = [
    "id", "name", "role", "email", "overtime", "trained",
    "certified_until", "can_cover_cash",
]
ATTRACTION_COLUMNS = [
    "name", "kind", "exclusivity", "required_staff", "location", "capacity",
    "weather_restriction", "risk_level", "min_age", "seasonal",
    "season_start", "season_end", "blackout_days",
]
SERVICE_PLACE_COLUMNS = [
    "id", "name", "location", "kind", "menu", "capacity", "payment_methods",
]
TICKET_COLUMNS = [
    "variant", "id", "name", "count", "exclusivity", "purchase_date", "status",
    "channel", "employee_discount", "used", "category", "valid_from",
    "valid_to", "season_type", "attraction",
]
ASSIGNMENT_COLUMNS = ["day", "shift", "employee_id", "target_kind", "target", "duty"]
FAST_PASS_COLUMNS = ["ticket_id", "valid_day", "used"]

ESCAPE = "\\"


@dataclass
class AssignmentRecord:
    """One stored assignment, resolved against the catalogue."""
    day: date
    shift: Shift
    employee: Employee
    target: AssignmentTarget


class RecordStore:
    """
    Load and save park entities as pipe-delimited text files.

    Attributes:
        data_dir: Directory holding the record files
        settings: Separators, null token, date format and encoding
    """

    def __init__(self, data_dir: Optional[str] = None, settings: Optional[PersistenceConfig] = None):
        self.settings = settings or config.persistence
        self.data_dir = Path(data_dir or self.settings.data_dir)
        self.logger = get_logger("persistence")

    # =========================================================================
    # FIELD CODECS
    # =========================================================================

    def _text(self, value: Any) -> str:
        if value is None:
            return self.settings.null_token
        if isinstance(value, bool):
            return "true" if value else "false"
        text = str(value)
        if text == self.settings.null_token or text.startswith(ESCAPE):
            return ESCAPE + text
        return text

    def _optional(self, value: str) -> Optional[str]:
        if value is None or value == "" or value == self.settings.null_token:
            return None
        if value.startswith(ESCAPE):
            return value[1:]
        return value

    def _flag(self, value: str) -> bool:
        return str(value).strip().lower() == "true"

    def _number(self, value: str) -> int:
        text = self._optional(value)
        return int(text) if text is not None else 0

    def _day(self, value: Any) -> str:
        return format_day(value, self.settings.null_token, self.settings.date_format)

    def _parse_day(self, value: str) -> Optional[date]:
        return parse_day(value, self.settings.null_token, self.settings.date_format)

    def _join(self, values: Sequence[Any]) -> str:
        if not values:
            return self.settings.null_token
        separator = self.settings.list_separator
        items = []
        for value in values:
            item = str(value).replace(ESCAPE, ESCAPE * 2).replace(separator, ESCAPE + separator)
            if item == self.settings.null_token:
                item = ESCAPE + item
            items.append(item)
        return separator.join(items)

    def _split(self, value: str) -> List[str]:
        if value is None or value == "" or value == self.settings.null_token:
            return []

        items, current = [], []
        chars = iter(value)
        for char in chars:
            if char == ESCAPE:
                current.append(next(chars, ""))
            elif char == self.settings.list_separator:
                items.append("".join(current))
                current = []
            else:
                current.append(char)
        items.append("".join(current))
        return [item for item in items if item]

    # =========================================================================
    # FILE ACCESS
    # =========================================================================

    def _write(self, filename: str, columns: List[str], rows: List[Dict[str, str]]) -> str:
        path = self.data_dir / filename
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            df = pd.DataFrame(rows, columns=columns)
            df.to_csv(
                path,
                sep=self.settings.field_separator,
                header=False,
                index=False,
                encoding=self.settings.encoding
            )
        except OSError as e:
            raise PersistenceError(f"Could not write {filename}", {"path": str(path)}) from e

        self.logger.info(f"Saved {len(rows)} record(s) to {path}")
        return str(path)

    def _read(self, filename: str, columns: List[str]) -> List[Dict[str, str]]:
        path = self.data_dir / filename
        if not path.exists():
            self.logger.debug(f"{path} not found, nothing to load")
            return []

        try:
            df = pd.read_csv(
                path,
                sep=self.settings.field_separator,
                header=None,
                names=columns,
                dtype=str,
                keep_default_na=False,
                encoding=self.settings.encoding
            )
        except pd.errors.EmptyDataError:
            return []
        except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {filename}", {"path": str(path)}) from e

        self.logger.info(f"Loaded {len(df)} record(s) from {path}")
        return df.to_dict(orient="records")

    def _parse_rows(self, filename: str, rows: List[Dict[str, str]], parser) -> List[Any]:
        parsed = []
        for line, row in enumerate(rows, 1):
            try:
                parsed.append(parser(row))
            except PersistenceError:
                raise
            except (ValueError, KeyError, TypeError) as e:
                raise PersistenceError(
                    f"Malformed record in {filename}", {"line": line}
                ) from e
        return parsed

    # =========================================================================
    # EMPLOYEES
    # =========================================================================

    def save_employees(self, employees: List[Employee]) -> str:
        rows = [
            {
                "id": e.id,
                "name": e.name,
                "role": e.role.name,
                "email": self._text(e.email or None),
                "overtime": self._text(e.overtime),
                "trained": self._text(e.trained),
                "certified_until": self._day(e.certified_until),
                "can_cover_cash": self._text(e.can_cover_cash),
            }
            for e in employees
        ]
        return self._write(EMPLOYEE_FILE, EMPLOYEE_COLUMNS, rows)

    def _parse_employee(self, row: Dict[str, str]) -> Employee:
        return Employee(
            id=row["id"],
            name=row["name"],
            role=EmployeeRole[row["role"]],
            email=self._optional(row["email"]) or "",
            overtime=self._flag(row["overtime"]),
            trained=self._flag(row["trained"]),
            certified_until=self._parse_day(row["certified_until"]),
            can_cover_cash=self._flag(row["can_cover_cash"]),
        )

    def load_employees(self) -> List[Employee]:
        rows = self._read(EMPLOYEE_FILE, EMPLOYEE_COLUMNS)
        return self._parse_rows(EMPLOYEE_FILE, rows, self._parse_employee)

    # =========================================================================
    # ATTRACTIONS
    # =========================================================================

    def save_attractions(self, attractions: List[Attraction]) -> str:
        rows = []
        for a in attractions:
            rows.append({
                "name": a.name,
                "kind": a.kind.name,
                "exclusivity": a.exclusivity.name,
                "required_staff": self._text(a.required_staff),
                "location": self._text(a.location or None),
                "capacity": self._text(a.capacity),
                "weather_restriction": self._text(a.weather_restriction or None),
                "risk_level": a.risk_level.name if a.risk_level else self.settings.null_token,
                "min_age": self._text(a.min_age),
                "seasonal": self._text(a.window.seasonal),
                "season_start": self._day(a.window.start),
                "season_end": self._day(a.window.end),
                "blackout_days": self._join([self._day(d) for d in sorted(a.window.blackout_days)]),
            })
        return self._write(ATTRACTION_FILE, ATTRACTION_COLUMNS, rows)

    def _parse_attraction(self, row: Dict[str, str]) -> Attraction:
        risk = self._optional(row["risk_level"])
        window = AvailabilityWindow(
            seasonal=self._flag(row["seasonal"]),
            start=self._parse_day(row["season_start"]),
            end=self._parse_day(row["season_end"]),
            blackout_days={self._parse_day(d) for d in self._split(row["blackout_days"])},
        )
        return Attraction(
            name=row["name"],
            kind=AttractionKind.from_string(row["kind"]),
            exclusivity=ExclusivityTier[row["exclusivity"]],
            required_staff=self._number(row["required_staff"]),
            location=self._optional(row["location"]) or "",
            capacity=self._number(row["capacity"]),
            weather_restriction=self._optional(row["weather_restriction"]) or "",
            risk_level=RiskLevel.from_string(risk),
            min_age=self._number(row["min_age"]),
            window=window,
        )

    def load_attractions(self) -> List[Attraction]:
        rows = self._read(ATTRACTION_FILE, ATTRACTION_COLUMNS)
        return self._parse_rows(ATTRACTION_FILE, rows, self._parse_attraction)

    # =========================================================================
    # SERVICE PLACES
    # =========================================================================

    def save_service_places(self, places: List[ServicePlace]) -> str:
        rows = [
            {
                "id": p.id,
                "name": p.name,
                "location": self._text(p.location or None),
                "kind": p.kind.name,
                "menu": self._join(p.menu),
                "capacity": self._text(p.capacity),
                "payment_methods": self._join(p.payment_methods),
            }
            for p in places
        ]
        return self._write(SERVICE_PLACE_FILE, SERVICE_PLACE_COLUMNS, rows)

    def _parse_service_place(self, row: Dict[str, str]) -> ServicePlace:
        return ServicePlace(
            id=row["id"],
            name=row["name"],
            location=self._optional(row["location"]) or "",
            kind=ServicePlaceKind.from_string(row["kind"]),
            menu=self._split(row["menu"]),
            capacity=self._number(row["capacity"]),
            payment_methods=self._split(row["payment_methods"]),
        )

    def load_service_places(self) -> List[ServicePlace]:
        rows = self._read(SERVICE_PLACE_FILE, SERVICE_PLACE_COLUMNS)
        return self._parse_rows(SERVICE_PLACE_FILE, rows, self._parse_service_place)

    # =========================================================================
    # TICKETS
    # =========================================================================

    def save_tickets(self, tickets: List[Ticket]) -> str:
        rows = []
        for t in tickets:
            attraction = getattr(t, "attraction", None)
            rows.append({
                "variant": t.variant,
                "id": t.id,
                "name": self._text(t.name or None),
                "count": self._text(t.count),
                "exclusivity": t.exclusivity.name if t.exclusivity else self.settings.null_token,
                "purchase_date": self._day(t.purchase_date),
                "status": self._text(t.status or None),
                "channel": self._text(t.channel or None),
                "employee_discount": self._text(t.employee_discount),
                "used": self._text(t.used),
                "category": self._text(getattr(t, "category", None) or None),
                "valid_from": self._day(getattr(t, "valid_from", None)),
                "valid_to": self._day(getattr(t, "valid_to", None)),
                "season_type": self._text(getattr(t, "season_type", None) or None),
                "attraction": self._text(attraction.name if attraction is not None else None),
            })
        return self._write(TICKET_FILE, TICKET_COLUMNS, rows)

    def _parse_ticket(self, row: Dict[str, str], catalog: Optional[ParkCatalog]) -> Ticket:
        tier = self._optional(row["exclusivity"])
        common = dict(
            id=row["id"],
            name=self._optional(row["name"]) or "",
            count=self._number(row["count"]),
            exclusivity=ExclusivityTier[tier] if tier else None,
            purchase_date=self._parse_day(row["purchase_date"]),
            status=self._optional(row["status"]) or "",
            channel=self._optional(row["channel"]) or "",
            employee_discount=self._flag(row["employee_discount"]),
            used=self._flag(row["used"]),
        )

        variant = row["variant"]
        if variant == "basic":
            return BasicTicket(category=self._optional(row["category"]) or "", **common)
        if variant == "seasonal":
            return SeasonalTicket(
                valid_from=self._parse_day(row["valid_from"]),
                valid_to=self._parse_day(row["valid_to"]),
                season_type=self._optional(row["season_type"]) or "",
                category=self._optional(row["category"]) or "",
                **common
            )
        if variant == "single":
            name = self._optional(row["attraction"])
            attraction = None
            if name is not None:
                attraction = catalog.find_attraction(name) if catalog is not None else None
                if attraction is None:
                    raise PersistenceError(
                        "Ticket references an unknown attraction",
                        {"ticket": row["id"], "attraction": name}
                    )
            return SingleAttractionTicket(attraction=attraction, **common)

        raise ValueError(f"Unknown ticket variant: {variant}")

    def load_tickets(self, catalog: Optional[ParkCatalog] = None) -> List[Ticket]:
        """
        Load tickets of every variant.

        Args:
            catalog: Resolves the attraction of single-attraction tickets

        Raises:
            PersistenceError: If a ticket references an attraction the
                catalogue does not know
        """
        rows = self._read(TICKET_FILE, TICKET_COLUMNS)
        return self._parse_rows(TICKET_FILE, rows, lambda row: self._parse_ticket(row, catalog))

    # =========================================================================
    # FAST PASSES
    # =========================================================================

    def save_fast_passes(self, passes: List[FastPass]) -> str:
        rows = [
            {
                "ticket_id": self._text(p.ticket.id if p.ticket is not None else None),
                "valid_day": self._day(p.valid_day),
                "used": self._text(p.used),
            }
            for p in passes
        ]
        return self._write(FAST_PASS_FILE, FAST_PASS_COLUMNS, rows)

    def _parse_fast_pass(self, row: Dict[str, str], tickets: Dict[str, Ticket]) -> FastPass:
        ticket_id = self._optional(row["ticket_id"])
        ticket = None
        if ticket_id is not None:
            ticket = tickets.get(ticket_id)
            if ticket is None:
                raise PersistenceError(
                    "FastPass references an unknown ticket", {"ticket": ticket_id}
                )
        return FastPass(
            ticket=ticket,
            valid_day=self._parse_day(row["valid_day"]),
            used=self._flag(row["used"]),
        )

    def load_fast_passes(self, tickets: List[Ticket]) -> List[FastPass]:
        """
        Load FastPass tokens, attaching each to its loaded ticket.

        Args:
            tickets: Tickets returned by load_tickets

        Raises:
            PersistenceError: If a pass references a ticket id not in tickets
        """
        by_id = {t.id: t for t in tickets}
        rows = self._read(FAST_PASS_FILE, FAST_PASS_COLUMNS)
        return self._parse_rows(
            FAST_PASS_FILE, rows, lambda row: self._parse_fast_pass(row, by_id)
        )

    # =========================================================================
    # ASSIGNMENTS
    # =========================================================================

    def save_assignments(self, engine: StaffingAssignmentEngine) -> str:
        """Save every assignment held by the engine's index."""
        rows = []
        for day in engine.store.days():
            for shift in Shift:
                for employee, target in engine.assignments_on(day, shift).items():
                    ref, duty = self._target_fields(target)
                    rows.append({
                        "day": self._day(day),
                        "shift": shift.value,
                        "employee_id": employee.id,
                        "target_kind": type(target).__name__,
                        "target": ref,
                        "duty": duty,
                    })
        return self._write(ASSIGNMENT_FILE, ASSIGNMENT_COLUMNS, rows)

    def _target_fields(self, target: AssignmentTarget) -> Tuple[str, str]:
        null = self.settings.null_token
        if isinstance(target, AttractionTarget):
            return target.attraction.name, null
        if isinstance(target, ServicePlaceTarget):
            return target.place.id, target.duty.name
        if isinstance(target, ZoneListTarget):
            return self._join(target.zones), null
        raise TypeError(f"Unknown assignment target: {target!r}")

    def _parse_assignment(self, row: Dict[str, str], catalog: ParkCatalog) -> AssignmentRecord:
        day = self._parse_day(row["day"])
        shift = Shift.from_label(row["shift"])
        if day is None or shift is None:
            raise ValueError("Assignment needs a day and a valid shift")

        employee = catalog.find_employee(row["employee_id"])
        if employee is None:
            raise PersistenceError(
                "Assignment references an unknown employee", {"employee": row["employee_id"]}
            )

        kind = row["target_kind"]
        ref = row["target"]
        if kind == AttractionTarget.__name__:
            attraction = catalog.find_attraction(ref)
            if attraction is None:
                raise PersistenceError(
                    "Assignment references an unknown attraction", {"attraction": ref}
                )
            target = AttractionTarget(attraction)
        elif kind == ServicePlaceTarget.__name__:
            place = catalog.find_service_place(ref)
            if place is None:
                raise PersistenceError(
                    "Assignment references an unknown service place", {"place": ref}
                )
            target = ServicePlaceTarget(place, Duty[row["duty"]])
        elif kind == ZoneListTarget.__name__:
            target = ZoneListTarget(tuple(self._split(ref)))
        else:
            raise ValueError(f"Unknown assignment target kind: {kind}")

        return AssignmentRecord(day=day, shift=shift, employee=employee, target=target)

    def load_assignments(self, catalog: ParkCatalog) -> List[AssignmentRecord]:
        """
        Load stored assignments, resolving references against a catalogue.

        Raises:
            PersistenceError: On unreadable files, malformed lines or
                references the catalogue does not know
        """
        rows = self._read(ASSIGNMENT_FILE, ASSIGNMENT_COLUMNS)
        return self._parse_rows(
            ASSIGNMENT_FILE, rows, lambda row: self._parse_assignment(row, catalog)
        )


def replay_assignments(engine: StaffingAssignmentEngine, records: List[AssignmentRecord]) -> int:
    """
    Re-apply loaded assignments through the engine.

    Each record goes through the engine's normal validation, so the index
    and facility rosters are rebuilt together.

    Returns:
        Number of assignments applied
    """
    for record in records:
        target = record.target
        if isinstance(target, AttractionTarget):
            engine.assign_to_attraction(record.employee, target.attraction, record.day, record.shift)
        elif isinstance(target, ServicePlaceTarget) and target.duty == Duty.COOK:
            engine.assign_cook_to_cafeteria(record.employee, target.place, record.day, record.shift)
        elif isinstance(target, ServicePlaceTarget):
            engine.assign_cashier_to_service_place(record.employee, target.place, record.day, record.shift)
        else:
            engine.assign_to_general_service(record.employee, list(target.zones), record.day, record.shift)
    return len(records)
