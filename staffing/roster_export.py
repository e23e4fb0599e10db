"""
Roster output - tabular, Excel and console views of the assignment index.
"""
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from rich.console import Console
from rich.table import Table

from config import get_logger
from models.shift import Shift
from staffing.engine import StaffingAssignmentEngine
from staffing.targets import describe_target, target_kind

logger = get_logger("roster")

ROSTER_COLUMNS = ["day", "shift", "employee_id", "employee_name", "target_kind", "target"]

HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
SHIFT_FILLS = {
    Shift.OPENING: PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid"),  # Green
    Shift.CLOSING: PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid"),  # Yellow
}
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)


def roster_dataframe(engine: StaffingAssignmentEngine, days: Iterable[date]) -> pd.DataFrame:
    """
    Flatten the assignment index into a DataFrame.

    Args:
        engine: Engine holding the assignments
        days: Days to include

    Returns:
        One row per assignment, sorted by day, shift and employee id
    """
    rows = []
    for day in days:
        for shift in Shift:
            for employee, target in engine.assignments_on(day, shift).items():
                rows.append({
                    "day": day,
                    "shift": shift.value,
                    "employee_id": employee.id,
                    "employee_name": employee.name,
                    "target_kind": target_kind(target),
                    "target": describe_target(target),
                })

    df = pd.DataFrame(rows, columns=ROSTER_COLUMNS)
    if not df.empty:
        df = df.sort_values(["day", "shift", "employee_id"], ignore_index=True)
    return df


def export_roster_excel(
    engine: StaffingAssignmentEngine,
    days: Iterable[date],
    output_dir: Optional[str] = None
) -> str:
    """
    Write the roster for a set of days to an Excel workbook.

    Args:
        engine: Engine holding the assignments
        days: Days to include
        output_dir: Target directory (configured output dir by default)

    Returns:
        Path to the written workbook
    """
    days = list(days)
    output_path = Path(output_dir or engine.config.output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    first = min(days) if days else date.today()
    filename = f"park_roster_{first}_{date.today().strftime('%Y%m%d')}.xlsx"
    filepath = output_path / filename

    df = roster_dataframe(engine, days)

    wb = Workbook()
    ws = wb.active
    ws.title = "Roster"

    headers = ["Day", "Shift", "ID", "Employee Name", "Kind", "Assigned To"]
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = THIN_BORDER

    for col, width in zip("ABCDEF", [12, 10, 8, 22, 14, 30]):
        ws.column_dimensions[col].width = width

    for row, record in enumerate(df.itertuples(index=False), 2):
        values = [
            record.day.isoformat(),
            record.shift,
            record.employee_id,
            record.employee_name,
            record.target_kind,
            record.target,
        ]
        shift_fill = SHIFT_FILLS.get(Shift.from_label(record.shift), PatternFill())
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = THIN_BORDER
            if col == 2:
                cell.fill = shift_fill
                cell.alignment = Alignment(horizontal="center")

    wb.save(filepath)
    logger.info(f"Roster saved to {filepath} ({len(df)} assignments)")
    return str(filepath)


def print_roster(
    engine: StaffingAssignmentEngine,
    day: date,
    console: Optional[Console] = None
) -> None:
    """Print the assignments of one day as a rich table."""
    console = console or Console()

    table = Table(title=f"Park Roster - {day}")
    table.add_column("Shift", style="cyan")
    table.add_column("Employee")
    table.add_column("Kind", style="magenta")
    table.add_column("Assigned To")

    for shift in Shift:
        for employee, target in sorted(
            engine.assignments_on(day, shift).items(), key=lambda item: item[0].id
        ):
            table.add_row(shift.value, employee.name, target_kind(target), describe_target(target))

    console.print(table)
