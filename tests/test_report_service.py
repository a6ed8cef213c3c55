from __future__ import annotations

from datetime import date, datetime

import pytest

from timeclock.core.enums import EventType
from timeclock.core.exceptions import UpstreamError
from timeclock.employees.model import Employee
from timeclock.events.model import PunchEvent
from timeclock.reports.exporter import CSV_HEADERS
from timeclock.reports.service import ReportService


class FakeEventRepo:
    def __init__(self, events):
        self._events = events
        self.last_args = None

    def list_between(self, *, start_date: date, end_date: date, employee_id=None):
        self.last_args = {"start_date": start_date, "end_date": end_date, "employee_id": employee_id}
        return [e for e in self._events if employee_id is None or e.employee_id == employee_id]


class FakeEmployees:
    def __init__(self, employees):
        self._employees = employees

    def list_all(self):
        return list(self._employees)

    def get_by_id(self, employee_id: str):
        return next((e for e in self._employees if e.employee_id == employee_id), None)


class Unreachable:
    def list_between(self, **kwargs):
        raise UpstreamError("timeout")

    def list_all(self):
        raise UpstreamError("timeout")


def ev(employee_id, event_type, when):
    return PunchEvent(employee_id=employee_id, type=event_type, timestamp=when)


EVENTS = [
    ev("1", EventType.PUNCH_IN, datetime(2026, 3, 4, 9, 0)),
    ev("1", EventType.PUNCH_OUT, datetime(2026, 3, 4, 17, 0)),
    ev("2", EventType.PUNCH_IN, datetime(2026, 3, 5, 8, 30)),
    ev("2", EventType.BREAK_START, datetime(2026, 3, 5, 12, 0)),
    ev("2", EventType.BREAK_END, datetime(2026, 3, 5, 12, 30)),
    ev("2", EventType.PUNCH_OUT, datetime(2026, 3, 5, 16, 30)),
]
EMPLOYEES = [Employee("1", "John Smith", "EMP001"), Employee("2", "Sarah Johnson", "EMP002")]
NOW = datetime(2026, 3, 8, 12, 0)


def make_service(events=None, employees=None) -> ReportService:
    return ReportService(events or FakeEventRepo(EVENTS), employees or FakeEmployees(EMPLOYEES), clock=lambda: NOW)


def test_list_sessions_forwards_filters():
    repo = FakeEventRepo(EVENTS)
    svc = make_service(events=repo)

    sessions = svc.list_sessions(date(2026, 3, 1), date(2026, 3, 8), employee_id="2")

    assert repo.last_args == {"start_date": date(2026, 3, 1), "end_date": date(2026, 3, 8), "employee_id": "2"}
    assert [s.employee_id for s in sessions] == ["2"]
    assert sessions[0].working_hours == pytest.approx(7.5)


def test_weekly_summary_defaults_to_clock_date():
    repo = FakeEventRepo(EVENTS)
    svc = make_service(events=repo)

    w = svc.weekly_summary("1")

    assert repo.last_args["start_date"] == date(2026, 3, 2)
    assert repo.last_args["end_date"] == date(2026, 3, 8)
    assert w.days_worked == 1
    assert w.total_hours == pytest.approx(8.0)


def test_overview_totals():
    o = make_service().overview(date(2026, 3, 1), date(2026, 3, 8))

    assert o.total_sessions == 2
    assert o.total_working_hours == pytest.approx(15.5)
    assert o.total_break_time == pytest.approx(30)


def test_export_uses_directory_names():
    text = make_service().export_csv(date(2026, 3, 1), date(2026, 3, 8))

    lines = text.split("\n")
    assert len(lines) == 3
    assert lines[1].startswith('"Sarah Johnson","EMP002","2026-03-05"')
    assert lines[2].startswith('"John Smith","EMP001","2026-03-04"')


def test_unreachable_sources_give_empty_results():
    svc = make_service(events=Unreachable(), employees=Unreachable())

    assert svc.list_sessions(date(2026, 3, 1), date(2026, 3, 8)) == []
    assert svc.weekly_summary("1").days_worked == 0
    assert svc.overview(date(2026, 3, 1), date(2026, 3, 8)).total_sessions == 0
    assert svc.export_csv(date(2026, 3, 1), date(2026, 3, 8)) == ",".join(f'"{h}"' for h in CSV_HEADERS)


def test_missing_directory_falls_back_to_unknown():
    svc = make_service(employees=Unreachable())

    text = svc.export_csv(date(2026, 3, 1), date(2026, 3, 8))

    assert text.split("\n")[1].startswith('"Unknown","Unknown",')
