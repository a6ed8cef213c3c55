from datetime import date, datetime, timedelta

import pytest

from timeclock.core.enums import EventType
from timeclock.events.model import PunchEvent
from timeclock.sessions.aggregator import build_sessions, summarize_sessions, weekly_summary


def ev(employee_id: str, event_type: EventType, when: datetime, **flags) -> PunchEvent:
    return PunchEvent(employee_id=employee_id, type=event_type, timestamp=when, **flags)


def worked_day(employee_id: str, day: date, *, start=(9, 0), end=(17, 0), break_minutes: int = 0, late=False):
    t_in = datetime.combine(day, datetime.min.time()).replace(hour=start[0], minute=start[1])
    t_out = datetime.combine(day, datetime.min.time()).replace(hour=end[0], minute=end[1])
    events = [ev(employee_id, EventType.PUNCH_IN, t_in, is_late=late)]
    if break_minutes:
        b_start = t_in + timedelta(hours=3)
        events.append(ev(employee_id, EventType.BREAK_START, b_start))
        events.append(ev(employee_id, EventType.BREAK_END, b_start + timedelta(minutes=break_minutes)))
    events.append(ev(employee_id, EventType.PUNCH_OUT, t_out))
    return events


NOW = datetime(2026, 3, 8, 20, 0)


def test_sessions_filtered_grouped_and_most_recent_first():
    events = (
        worked_day("1", date(2026, 3, 1))
        + worked_day("2", date(2026, 3, 3))
        + worked_day("1", date(2026, 3, 3))
        + worked_day("1", date(2026, 3, 5))
        + worked_day("1", date(2026, 3, 9))
    )

    sessions = build_sessions(events, date(2026, 3, 2), date(2026, 3, 8), now=NOW)

    assert [(s.employee_id, s.date) for s in sessions] == [
        ("1", date(2026, 3, 5)),
        ("2", date(2026, 3, 3)),
        ("1", date(2026, 3, 3)),
    ]


def test_range_bounds_are_inclusive():
    events = worked_day("1", date(2026, 3, 2)) + worked_day("1", date(2026, 3, 8))

    sessions = build_sessions(events, date(2026, 3, 2), date(2026, 3, 8), now=NOW)

    assert {s.date for s in sessions} == {date(2026, 3, 2), date(2026, 3, 8)}


def test_days_without_punch_in_are_dropped():
    events = [ev("1", EventType.PUNCH_OUT, datetime(2026, 3, 4, 17, 0))]

    assert build_sessions(events, date(2026, 3, 1), date(2026, 3, 8), now=NOW) == []


def test_empty_event_list_is_no_activity():
    assert build_sessions([], date(2026, 3, 1), date(2026, 3, 8), now=NOW) == []


def test_weekly_rollup_end_to_end():
    events = (
        worked_day("1", date(2026, 3, 4))
        + worked_day("1", date(2026, 3, 6), break_minutes=30, late=True)
        + worked_day("2", date(2026, 3, 6))
        + worked_day("1", date(2026, 3, 1))  # outside the window
    )

    w = weekly_summary("1", date(2026, 3, 8), events, now=NOW)

    assert w.week_start == date(2026, 3, 2)
    assert w.week_end == date(2026, 3, 8)
    assert w.days_worked == 2
    assert w.total_hours == pytest.approx(15.5)
    assert w.total_break_time == pytest.approx(30)
    assert w.average_hours_per_day == pytest.approx(7.75)
    assert [d.date for d in w.daily_breakdown] == [date(2026, 3, 4), date(2026, 3, 6)]
    assert w.daily_breakdown[1].day_name == "Friday"
    assert w.daily_breakdown[1].is_late is True
    assert w.daily_breakdown[1].hours == pytest.approx(7.5)


def test_weekly_rollup_without_sessions_is_zero():
    w = weekly_summary("1", date(2026, 3, 8), [], now=NOW)

    assert w.days_worked == 0
    assert w.total_hours == 0
    assert w.average_hours_per_day == 0
    assert w.daily_breakdown == ()


def test_overview_counts_and_per_employee_stats():
    events = (
        worked_day("1", date(2026, 3, 4), late=True)
        + worked_day("1", date(2026, 3, 5))
        + worked_day("2", date(2026, 3, 5), end=(16, 0))
    )
    sessions = build_sessions(events, date(2026, 3, 1), date(2026, 3, 8), now=NOW)

    o = summarize_sessions(sessions)

    assert o.total_sessions == 3
    assert o.total_working_hours == pytest.approx(23.0)
    assert o.late_arrivals == 1
    assert o.total_punch_cycles == 3
    assert o.average_hours_per_day == pytest.approx(23.0 / 3)

    stats = {e.employee_id: e for e in o.employee_stats}
    assert stats["1"].sessions == 2
    assert stats["1"].late_count == 1
    assert stats["1"].attendance_rate == pytest.approx(50.0)
    assert stats["2"].total_hours == pytest.approx(7.0)

    assert [(d.date, d.cycles) for d in o.daily_totals] == [(date(2026, 3, 4), 1), (date(2026, 3, 5), 2)]


def test_overview_of_nothing_is_zero():
    o = summarize_sessions([])

    assert o.total_sessions == 0
    assert o.average_hours_per_day == 0
    assert o.employee_stats == ()
