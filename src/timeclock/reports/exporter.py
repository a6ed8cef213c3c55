from __future__ import annotations

import csv
import io
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import format_clock
from ..core.constants import IN_PROGRESS_LABEL, UNKNOWN_EMPLOYEE
from ..employees.model import Employee
from ..sessions.model import PunchCycle, WorkSession

CSV_HEADERS = [
    "Employee Name",
    "Employee ID",
    "Date",
    "First Punch In",
    "Last Punch Out",
    "Total Hours",
    "Break Duration (min)",
    "Working Hours",
    "Punch Cycles",
    "Late Arrivals",
    "Early Departures",
    "Status",
]


def describe_cycles(cycles: Sequence[PunchCycle]) -> str:
    parts = []
    for index, cycle in enumerate(cycles, start=1):
        out = format_clock(cycle.punch_out) if cycle.punch_out else IN_PROGRESS_LABEL
        text = f"Cycle {index}: {format_clock(cycle.punch_in)} - {out}"
        if cycle.is_late_in:
            text += " (Late)"
        if cycle.is_early_out:
            text += " (Early)"
        parts.append(text)
    return "; ".join(parts)


def session_row(session: WorkSession, employee: Optional[Employee]) -> list:
    cycles = session.punch_cycles
    return [
        employee.name if employee else UNKNOWN_EMPLOYEE,
        employee.employee_code if employee else UNKNOWN_EMPLOYEE,
        session.date.strftime("%Y-%m-%d"),
        format_clock(session.punch_in),
        format_clock(session.punch_out),
        f"{session.total_hours:.2f}",
        round(session.break_duration),
        f"{session.working_hours:.2f}",
        describe_cycles(cycles),
        sum(1 for c in cycles if c.is_late_in),
        sum(1 for c in cycles if c.is_early_out),
        session.status.value,
    ]


def export_csv(sessions: Sequence[WorkSession], employee_directory: Mapping[str, Employee]) -> str:
    """Flatten sessions to CSV text: a header plus one row per session.

    Every cell is quoted. Employees missing from the directory render as
    "Unknown"; embedded quotes are doubled.
    """
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for session in sessions:
        writer.writerow(session_row(session, employee_directory.get(session.employee_id)))
    return out.getvalue().rstrip("\n")
