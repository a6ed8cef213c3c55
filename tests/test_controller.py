from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from timeclock.container import Container
from timeclock.core.exceptions import UpstreamError
from timeclock.employees.model import Employee
from timeclock.events.model import BusinessHours, PunchEvent
from timeclock.main import create_app
from timeclock.reports.service import ReportService
from timeclock.timetracking.service import TimeTrackingService


class InMemoryEvents:
    def __init__(self):
        self.events: list[PunchEvent] = []

    def list_between(self, *, start_date: date, end_date: date, employee_id: Optional[str] = None):
        return [
            e
            for e in self.events
            if start_date <= e.work_date <= end_date and (employee_id is None or e.employee_id == employee_id)
        ]

    def list_for_employee_on(self, employee_id: str, work_date: date):
        return self.list_between(start_date=work_date, end_date=work_date, employee_id=employee_id)

    def add(self, event: PunchEvent) -> PunchEvent:
        stored = replace(event, event_id=len(self.events) + 1)
        self.events.append(stored)
        return stored


class FailingWrites(InMemoryEvents):
    def add(self, event: PunchEvent) -> PunchEvent:
        raise UpstreamError("disk full")


class InMemoryHours:
    def __init__(self):
        self.current: Optional[BusinessHours] = None

    def get_current(self):
        return self.current

    def save(self, hours: BusinessHours) -> None:
        self.current = hours


class InMemoryEmployees:
    def list_all(self):
        return [Employee("1", "John Smith", "EMP001")]

    def get_by_id(self, employee_id: str):
        return next((e for e in self.list_all() if e.employee_id == employee_id), None)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def build_client(monkeypatch, events=None):
    monkeypatch.setenv("APP_ENV", "testing")
    events = events if events is not None else InMemoryEvents()
    clock = Clock(datetime(2026, 3, 2, 9, 0))
    employees = InMemoryEmployees()
    container = Container(
        clock=clock,
        time_tracking_service=TimeTrackingService(
            events,
            InMemoryHours(),
            employees,
            default_hours=BusinessHours(start_time=time(9, 0), end_time=time(17, 0)),
            clock=clock,
        ),
        report_service=ReportService(events, employees, clock=clock),
    )
    return create_app(container).test_client(), clock


def test_punch_then_status_and_session(monkeypatch):
    client, clock = build_client(monkeypatch)

    resp = client.post("/api/timetracking/punch", json={"employeeId": "1", "type": "punch_in"})
    assert resp.status_code == 201
    assert resp.get_json()["status"]["current_status"] == "working"

    clock.now = datetime(2026, 3, 2, 11, 30)
    status = client.get("/api/timetracking/status/1").get_json()
    assert status["can_start_break"] is True
    assert status["last_action"]["type"] == "punch_in"

    session = client.get("/api/timetracking/session/1").get_json()
    assert session["status"] == "in_progress"
    assert session["working_hours"] == pytest.approx(2.5)


def test_disallowed_punch_is_conflict(monkeypatch):
    client, _ = build_client(monkeypatch)

    resp = client.post("/api/timetracking/punch", json={"employee_id": "1", "type": "break_end"})

    assert resp.status_code == 409
    assert resp.get_json()["success"] is False


def test_unknown_punch_type_is_bad_request(monkeypatch):
    client, _ = build_client(monkeypatch)

    resp = client.post("/api/timetracking/punch", json={"employee_id": "1", "type": "nap"})

    assert resp.status_code == 400


def test_storage_failure_on_punch_is_service_unavailable(monkeypatch):
    client, _ = build_client(monkeypatch, events=FailingWrites())

    resp = client.post("/api/timetracking/punch", json={"employee_id": "1", "type": "punch_in"})

    assert resp.status_code == 503


def test_sessions_weekly_overview_and_export(monkeypatch):
    client, clock = build_client(monkeypatch)
    client.post("/api/timetracking/punch", json={"employee_id": "1", "type": "punch_in"})
    clock.now = datetime(2026, 3, 2, 17, 0)
    client.post("/api/timetracking/punch", json={"employee_id": "1", "type": "punch_out"})

    sessions = client.get("/api/timetracking/sessions?start_date=2026-03-01&end_date=2026-03-02").get_json()
    assert len(sessions) == 1
    assert sessions[0]["total_hours"] == 8.0

    weekly = client.get("/api/timetracking/weekly/1").get_json()
    assert weekly["days_worked"] == 1
    assert weekly["week_start"] == "2026-02-24"

    overview = client.get("/api/reports/overview").get_json()
    assert overview["total_sessions"] == 1

    export = client.get("/api/reports/export.csv?start_date=2026-03-02&end_date=2026-03-02")
    assert export.mimetype == "text/csv"
    lines = export.data.decode("utf-8-sig").split("\n")
    assert len(lines) == 2
    assert lines[1].startswith('"John Smith","EMP001","2026-03-02"')


def test_bad_date_range_is_bad_request(monkeypatch):
    client, _ = build_client(monkeypatch)

    assert client.get("/api/timetracking/sessions?start_date=2026-03-05&end_date=2026-03-01").status_code == 400
    assert client.get("/api/timetracking/sessions?start_date=03/01/2026").status_code == 400


def test_business_hours_roundtrip(monkeypatch):
    client, _ = build_client(monkeypatch)

    assert client.get("/api/business-hours").get_json()["start_time"] == "09:00"

    resp = client.put("/api/business-hours", json={"startTime": "08:00", "endTime": "16:00"})
    assert resp.status_code == 200
    assert client.get("/api/business-hours").get_json()["end_time"] == "16:00"

    assert client.put("/api/business-hours", json={"startTime": "18:00", "endTime": "08:00"}).status_code == 400


def test_non_object_json_body_is_bad_request(monkeypatch):
    client, _ = build_client(monkeypatch)

    punch = client.post("/api/timetracking/punch", data="5", content_type="application/json")
    hours = client.put("/api/business-hours", data="true", content_type="application/json")

    assert punch.status_code == 400
    assert punch.get_json()["message"] == "JSON object body required"
    assert hours.status_code == 400


def test_punch_for_unknown_employee_is_bad_request(monkeypatch):
    client, _ = build_client(monkeypatch)

    resp = client.post("/api/timetracking/punch", json={"employeeId": "999", "type": "punch_in"})

    assert resp.status_code == 400
    assert "Unknown employee" in resp.get_json()["message"]
    assert client.get("/api/timetracking/status/999").get_json()["current_status"] == "not_started"
