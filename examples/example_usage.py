"""Example: derive sessions and a CSV export straight from punch events (no Flask, no DB)."""

from datetime import date, datetime

from timeclock.employees.model import Employee
from timeclock.events.normalize import normalize_event
from timeclock.reports.exporter import export_csv
from timeclock.sessions.aggregator import build_sessions, weekly_summary
from timeclock.sessions.status import evaluate_status


def main():
    raw = [
        {"employeeId": "1", "type": "punch_in", "timestamp": "2026-03-02T09:05:00", "isLate": False},
        {"employeeId": "1", "type": "break_start", "timestamp": "2026-03-02T12:00:00"},
        {"employeeId": "1", "type": "break_end", "timestamp": "2026-03-02T12:45:00"},
        {"employee_id": "1", "type": "punch_out", "timestamp": "2026-03-02T17:10:00"},
        {"employee_id": "1", "type": "punch_in", "timestamp": "2026-03-03T09:40:00", "is_late": True},
    ]
    events = [normalize_event(r) for r in raw]
    now = datetime(2026, 3, 3, 11, 0)

    sessions = build_sessions(events, date(2026, 3, 2), date(2026, 3, 3), now=now)
    directory = {"1": Employee("1", "John Smith", "EMP001")}

    print(export_csv(sessions, directory))
    print(evaluate_status("1", [e for e in events if e.work_date == now.date()]))
    print(weekly_summary("1", now.date(), events, now=now))


if __name__ == "__main__":
    main()
