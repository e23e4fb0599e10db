"""Tests for the staffing compliance sweep and roster output."""

from datetime import timedelta

from openpyxl import load_workbook
from rich.console import Console

from models.constraints import ConstraintType
from models.employee import Employee, EmployeeRole
from models.shift import Shift
from staffing.roster_export import (
    ROSTER_COLUMNS,
    export_roster_excel,
    print_roster,
    roster_dataframe,
)
from staffing.validator import StaffingValidator


class TestStaffingValidator:
    def test_empty_park_reports_every_facility(self, engine, day):
        result = StaffingValidator().validate(engine, [day], [Shift.OPENING])

        assert not result.is_compliant
        entities = {v.affected_entity for v in result.by_type(ConstraintType.MIN_STAFF)}
        assert entities == {"Thunder Coaster", "Carousel", "History Hall", "C1", "T1"}

    def test_cafeteria_reports_missing_duty(self, engine, cook, day):
        cafeteria = engine.catalog.find_service_place("C1")
        engine.assign_cook_to_cafeteria(cook, cafeteria, day, Shift.OPENING)

        result = StaffingValidator().validate(engine, [day], [Shift.OPENING])
        cafeteria_violations = [v for v in result.violations if v.affected_entity == "C1"]

        assert len(cafeteria_violations) == 1
        assert cafeteria_violations[0].details["missing"] == ["cashier"]

    def test_closed_attraction_needs_no_staff(self, engine, roller_coaster, day):
        engine.schedule_maintenance(roller_coaster, day, day)
        result = StaffingValidator().validate(engine, [day], [Shift.OPENING])
        assert "Thunder Coaster" not in {v.affected_entity for v in result.violations}

    def test_staff_on_closed_attraction_is_a_warning(self, engine, high_operator, roller_coaster, day):
        engine.assign_to_attraction(high_operator, roller_coaster, day, Shift.OPENING)
        engine.schedule_maintenance(roller_coaster, day, day)

        result = StaffingValidator().validate(engine, [day], [Shift.OPENING])
        warnings = result.by_type(ConstraintType.AVAILABILITY)

        assert len(warnings) == 1
        assert warnings[0].details["employees"] == ["E1"]
        assert warnings[0] in result.warnings

    def test_fully_staffed_park_is_compliant(self, engine, catalog, high_operator, medium_operator,
                                             cook, cashier, regular, cleaner, day):
        second = Employee(id="E8", name="Rosa Paz", role=EmployeeRole.HIGH_RISK_OPERATOR, trained=True)
        extra_cashier = Employee(id="E9", name="Ines Rey", role=EmployeeRole.CASHIER)
        catalog.add_employee(second)
        catalog.add_employee(extra_cashier)

        engine.assign_to_attraction(high_operator, catalog.find_attraction("Thunder Coaster"), day, Shift.OPENING)
        engine.assign_to_attraction(second, catalog.find_attraction("Thunder Coaster"), day, Shift.OPENING)
        engine.assign_to_attraction(medium_operator, catalog.find_attraction("Carousel"), day, Shift.OPENING)
        engine.assign_to_attraction(regular, catalog.find_attraction("History Hall"), day, Shift.OPENING)
        engine.assign_cook_to_cafeteria(cook, catalog.find_service_place("C1"), day, Shift.OPENING)
        engine.assign_cashier_to_service_place(cashier, catalog.find_service_place("C1"), day, Shift.OPENING)
        engine.assign_cashier_to_service_place(extra_cashier, catalog.find_service_place("T1"), day, Shift.OPENING)

        result = StaffingValidator().validate(engine, [day], [Shift.OPENING])

        assert result.is_compliant
        assert result.score == 100.0


class TestRosterExport:
    def _staff(self, engine, high_operator, cashier, cleaner, roller_coaster, booth, day):
        engine.assign_to_attraction(high_operator, roller_coaster, day, Shift.OPENING)
        engine.assign_cashier_to_service_place(cashier, booth, day, Shift.CLOSING)
        engine.assign_to_general_service(cleaner, ["Lake"], day + timedelta(days=1), Shift.OPENING)

    def test_roster_dataframe(self, engine, high_operator, cashier, cleaner, roller_coaster, booth, day):
        self._staff(engine, high_operator, cashier, cleaner, roller_coaster, booth, day)

        df = roster_dataframe(engine, [day, day + timedelta(days=1)])

        assert list(df.columns) == ROSTER_COLUMNS
        assert len(df) == 3
        assert set(df["target_kind"]) == {"attraction", "service_place", "zones"}
        assert "North Booth (Cashier)" in set(df["target"])

    def test_empty_roster_dataframe(self, engine, day):
        df = roster_dataframe(engine, [day])
        assert df.empty
        assert list(df.columns) == ROSTER_COLUMNS

    def test_export_excel(self, engine, high_operator, cashier, cleaner, roller_coaster, booth, day, tmp_path):
        self._staff(engine, high_operator, cashier, cleaner, roller_coaster, booth, day)

        path = export_roster_excel(engine, [day, day + timedelta(days=1)], str(tmp_path))

        ws = load_workbook(path)["Roster"]
        assert ws.cell(row=1, column=1).value == "Day"
        assert ws.max_row == 4
        names = {ws.cell(row=r, column=4).value for r in range(2, 5)}
        assert names == {"Ana Ruiz", "Pablo Mora", "Juan Vega"}

    def test_print_roster(self, engine, high_operator, cashier, cleaner, roller_coaster, booth, day):
        self._staff(engine, high_operator, cashier, cleaner, roller_coaster, booth, day)
        console = Console(record=True, width=120)

        print_roster(engine, day, console=console)

        output = console.export_text()
        assert "Thunder Coaster" in output
        assert "Ana Ruiz" in output
        assert "Juan Vega" not in output
