from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from ..core.constants import WEEK_DAYS
from ..events.model import PunchEvent
from .builder import build_session
from .model import DailyBreakdown, DailyTotal, EmployeeStats, ReportOverview, WeeklySummary, WorkSession


def group_by_employee_day(
    events: Iterable[PunchEvent],
    start_date: date,
    end_date: date,
) -> dict[tuple[str, date], list[PunchEvent]]:
    groups: dict[tuple[str, date], list[PunchEvent]] = {}
    for event in events:
        work_date = event.work_date
        if not start_date <= work_date <= end_date:
            continue
        groups.setdefault((event.employee_id, work_date), []).append(event)
    return groups


def build_sessions(
    events: Iterable[PunchEvent],
    start_date: date,
    end_date: date,
    *,
    now: datetime,
) -> list[WorkSession]:
    """One session per (employee, day) in range, most recent day first."""
    sessions: list[WorkSession] = []
    for (employee_id, work_date), group in group_by_employee_day(events, start_date, end_date).items():
        group.sort(key=lambda e: e.timestamp)
        session = build_session(employee_id, work_date, group, now=now)
        if session is not None:
            sessions.append(session)

    sessions.sort(key=lambda s: s.date, reverse=True)
    return sessions


def week_window(as_of_date: date) -> tuple[date, date]:
    return as_of_date - timedelta(days=WEEK_DAYS - 1), as_of_date


def weekly_summary(
    employee_id: str,
    as_of_date: date,
    events: Iterable[PunchEvent],
    *,
    now: datetime,
) -> WeeklySummary:
    """Roll up the 7 calendar days ending at ``as_of_date`` (inclusive)."""
    week_start, week_end = week_window(as_of_date)
    own_events = (e for e in events if e.employee_id == employee_id)
    sessions = build_sessions(own_events, week_start, week_end, now=now)

    total_hours = sum(s.working_hours for s in sessions)
    total_break = sum(s.break_duration for s in sessions)
    days_worked = len(sessions)

    breakdown = tuple(
        DailyBreakdown(
            date=s.date,
            day_name=s.date.strftime("%A"),
            hours=s.working_hours,
            break_time=s.break_duration,
            is_late=s.is_late_in,
            is_early=s.is_early_out,
            punch_in=s.punch_in,
            punch_out=s.punch_out,
        )
        for s in sorted(sessions, key=lambda s: s.date)
    )

    return WeeklySummary(
        employee_id=employee_id,
        week_start=week_start,
        week_end=week_end,
        total_hours=total_hours,
        total_break_time=total_break,
        days_worked=days_worked,
        average_hours_per_day=total_hours / days_worked if days_worked else 0.0,
        daily_breakdown=breakdown,
    )


def summarize_sessions(sessions: Sequence[WorkSession]) -> ReportOverview:
    """Totals, per-employee statistics and per-day totals for a report view."""
    total_sessions = len(sessions)
    total_hours = sum(s.working_hours for s in sessions)

    by_employee: dict[str, list[WorkSession]] = {}
    by_date: dict[date, list[WorkSession]] = {}
    for s in sessions:
        by_employee.setdefault(s.employee_id, []).append(s)
        by_date.setdefault(s.date, []).append(s)

    employee_stats = []
    for employee_id, own in by_employee.items():
        hours = sum(s.working_hours for s in own)
        late = sum(1 for s in own if s.is_late_in)
        early = sum(1 for s in own if s.is_early_out)
        employee_stats.append(
            EmployeeStats(
                employee_id=employee_id,
                sessions=len(own),
                total_hours=hours,
                average_hours=hours / len(own),
                late_count=late,
                early_count=early,
                punch_cycles=sum(len(s.punch_cycles) for s in own),
                attendance_rate=(len(own) - late - early) / len(own) * 100,
            )
        )

    daily_totals = tuple(
        DailyTotal(
            date=day,
            hours=sum(s.working_hours for s in day_sessions),
            cycles=sum(len(s.punch_cycles) for s in day_sessions),
        )
        for day, day_sessions in sorted(by_date.items())
    )

    return ReportOverview(
        total_sessions=total_sessions,
        total_working_hours=total_hours,
        total_break_time=sum(s.break_duration for s in sessions),
        late_arrivals=sum(1 for s in sessions if s.is_late_in),
        early_departures=sum(1 for s in sessions if s.is_early_out),
        average_hours_per_day=total_hours / total_sessions if total_sessions else 0.0,
        total_punch_cycles=sum(len(s.punch_cycles) for s in sessions),
        employee_stats=tuple(employee_stats),
        daily_totals=daily_totals,
    )
