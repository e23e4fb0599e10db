"""Tests for flat-file park records."""

from datetime import date

import pytest

from exceptions import PersistenceError
from models.availability import AvailabilityWindow
from models.employee import Employee
from models.facility import ServicePlace, ServicePlaceKind
from models.shift import Shift
from models.ticket import BasicTicket, FastPass, SeasonalTicket, SingleAttractionTicket
from models.tier import ExclusivityTier
from persistence.records import RecordStore, replay_assignments
from staffing.catalog import InMemoryCatalog
from staffing.engine import StaffingAssignmentEngine
from staffing.targets import AttractionTarget, Duty, ServicePlaceTarget, ZoneListTarget


@pytest.fixture
def records(tmp_path) -> RecordStore:
    return RecordStore(str(tmp_path / "data"))


class TestEntityRecords:
    def test_missing_files_load_empty(self, records):
        assert records.load_employees() == []
        assert records.load_attractions() == []
        assert records.load_tickets() == []

    def test_employees(self, records, high_operator, medium_operator, regular):
        regular.can_cover_cash = True
        records.save_employees([high_operator, medium_operator, regular])

        loaded = {e.id: e for e in records.load_employees()}

        assert loaded["E1"].trained
        assert loaded["E1"].email == "ana@park.test"
        assert loaded["E2"].certified_until == date(2025, 12, 31)
        assert loaded["E5"].can_cover_cash
        assert loaded["E5"].certified_until is None
        assert loaded["E5"].email == ""

    def test_file_format(self, records, cashier):
        path = records.save_employees([cashier])
        with open(path, encoding="utf-8") as f:
            line = f.read().strip()
        assert line == "E4|Pablo Mora|CASHIER|null|false|false|null|false"

    def test_attractions_keep_window(self, records, roller_coaster, museum):
        roller_coaster.schedule_maintenance(date(2025, 7, 1), date(2025, 7, 2))
        museum.window = AvailabilityWindow(True, date(2025, 6, 1), date(2025, 8, 31))
        records.save_attractions([roller_coaster, museum])

        loaded = {a.name: a for a in records.load_attractions()}
        coaster = loaded["Thunder Coaster"]

        assert coaster.is_high_risk
        assert coaster.exclusivity == ExclusivityTier.DIAMOND
        assert coaster.required_staff == 2
        assert coaster.weather_restriction == "No rain"
        assert coaster.window.blackout_days == {date(2025, 7, 1), date(2025, 7, 2)}
        assert not loaded["History Hall"].is_available(date(2025, 9, 1))
        assert loaded["History Hall"].min_age == 8

    def test_service_places(self, records, cafeteria, booth):
        records.save_service_places([cafeteria, booth])
        loaded = {p.id: p for p in records.load_service_places()}
        assert loaded["C1"].menu == ["Burger", "Salad"]
        assert loaded["C1"].requires_cook
        assert loaded["T1"].payment_methods == ["cash", "card"]

    def test_tickets(self, records, catalog, roller_coaster):
        tickets = [
            BasicTicket(id="B1", name="Day Pass", exclusivity=ExclusivityTier.GOLD,
                        purchase_date=date(2025, 7, 1), channel="online", category="Adult"),
            SeasonalTicket(id="S1", exclusivity=ExclusivityTier.DIAMOND,
                           valid_from=date(2025, 6, 1), valid_to=date(2025, 8, 31),
                           season_type="Summer", employee_discount=True),
            SingleAttractionTicket(id="I1", exclusivity=None, attraction=roller_coaster, used=True),
        ]
        records.save_tickets(tickets)

        loaded = {t.id: t for t in records.load_tickets(catalog)}

        assert isinstance(loaded["B1"], BasicTicket)
        assert loaded["B1"].category == "Adult"
        assert loaded["B1"].purchase_date == date(2025, 7, 1)
        assert loaded["S1"].is_valid_on(date(2025, 8, 31))
        assert loaded["S1"].employee_discount
        assert loaded["I1"].attraction is roller_coaster
        assert loaded["I1"].exclusivity is None
        assert loaded["I1"].is_used()

    def test_single_ticket_with_unknown_attraction(self, records, roller_coaster):
        records.save_tickets([SingleAttractionTicket(id="I1", attraction=roller_coaster)])
        with pytest.raises(PersistenceError):
            records.load_tickets(InMemoryCatalog())

    def test_malformed_line(self, records):
        records.data_dir.mkdir(parents=True)
        (records.data_dir / "employees.txt").write_text("E1|Ana|PILOT|null|false|false|null|false\n")
        with pytest.raises(PersistenceError) as excinfo:
            records.load_employees()
        assert excinfo.value.__cause__ is not None


class TestAssignmentRecords:
    def test_round_trip_through_engine(self, records, engine, catalog, app_config,
                                       high_operator, cook, cleaner, roller_coaster, cafeteria, day):
        engine.assign_to_attraction(high_operator, roller_coaster, day, Shift.OPENING)
        engine.assign_cook_to_cafeteria(cook, cafeteria, day, Shift.CLOSING)
        engine.assign_to_general_service(cleaner, ["Lake", "Plaza"], day, Shift.OPENING)
        records.save_assignments(engine)

        loaded = records.load_assignments(catalog)
        assert len(loaded) == 3

        restored = StaffingAssignmentEngine(catalog, app_config=app_config)
        assert replay_assignments(restored, loaded) == 3

        assert restored.assignment_target_of(high_operator, day, Shift.OPENING) == AttractionTarget(roller_coaster)
        assert restored.assignment_target_of(cook, day, Shift.CLOSING) == ServicePlaceTarget(cafeteria, Duty.COOK)
        assert restored.assignment_target_of(cleaner, day, Shift.OPENING) == ZoneListTarget(("Lake", "Plaza"))

    def test_unknown_employee_reference(self, records, engine, catalog, high_operator, roller_coaster, day):
        engine.assign_to_attraction(high_operator, roller_coaster, day, Shift.OPENING)
        records.save_assignments(engine)

        with pytest.raises(PersistenceError):
            records.load_assignments(InMemoryCatalog(attractions=[roller_coaster]))

    def test_zone_names_keep_separators(self, records, engine, catalog, app_config, cleaner, day):
        engine.assign_to_general_service(cleaner, ["Plaza, north gate", "Lake"], day, Shift.OPENING)
        records.save_assignments(engine)

        loaded = records.load_assignments(catalog)

        assert loaded[0].target == ZoneListTarget(("Plaza, north gate", "Lake"))
        restored = StaffingAssignmentEngine(catalog, app_config=app_config)
        replay_assignments(restored, loaded)
        assert restored.assignment_target_of(cleaner, day, Shift.OPENING) == loaded[0].target


class TestFieldEscaping:
    def test_list_items_with_separator_and_backslash(self, records):
        place = ServicePlace(
            id="C9", name="Diner", kind=ServicePlaceKind.CAFETERIA,
            menu=["Fish, chips", "null", "C:\\menu"],
            payment_methods=["cash"],
        )
        records.save_service_places([place])

        loaded = records.load_service_places()[0]

        assert loaded.menu == ["Fish, chips", "null", "C:\\menu"]
        assert loaded.payment_methods == ["cash"]

    def test_literal_null_text_is_kept(self, records):
        employee = Employee(id="E9", name="Nadia Null", email="null", certified_until=None)
        records.save_employees([employee])

        loaded = records.load_employees()[0]

        assert loaded.email == "null"
        assert loaded.certified_until is None

    def test_empty_text_still_loads_empty(self, records, cashier):
        records.save_employees([cashier])
        assert records.load_employees()[0].email == ""


class TestFastPassRecords:
    def test_round_trip_resolves_tickets(self, records):
        ticket = BasicTicket(id="B1", name="Day Pass", exclusivity=ExclusivityTier.GOLD)
        used = FastPass(ticket=ticket, valid_day=date(2025, 7, 14), used=True)
        fresh = FastPass(ticket=ticket, valid_day=date(2025, 7, 15))
        records.save_tickets([ticket])
        records.save_fast_passes([used, fresh])

        tickets = records.load_tickets()
        passes = records.load_fast_passes(tickets)

        assert len(passes) == 2
        assert passes[0].ticket is tickets[0]
        assert passes[0].used
        assert not passes[0].is_valid(date(2025, 7, 14))
        assert passes[1].valid_day == date(2025, 7, 15)
        assert passes[1].is_valid(date(2025, 7, 15))

    def test_unknown_ticket_reference(self, records):
        ticket = BasicTicket(id="B1")
        records.save_fast_passes([FastPass(ticket=ticket, valid_day=date(2025, 7, 14))])
        with pytest.raises(PersistenceError):
            records.load_fast_passes([])

    def test_missing_file_loads_empty(self, records):
        assert records.load_fast_passes([]) == []
