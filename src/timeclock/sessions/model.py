from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EventType, SessionStatus, WorkState
from ..events.model import PunchEvent


@dataclass(frozen=True)
class PunchCycle:
    """One punch-in paired with its positional punch-out."""

    punch_in: datetime
    punch_out: Optional[datetime]
    is_late_in: bool = False
    is_early_out: bool = False


@dataclass(frozen=True)
class WorkSession:
    """Read-model: one employee's day, derived from punch events.

    Never stored; the event log is the source of truth.
    """

    employee_id: str
    date: date
    punch_in: datetime
    punch_out: Optional[datetime]
    break_start: Optional[datetime]
    break_end: Optional[datetime]
    total_hours: float
    break_duration: float
    working_hours: float
    is_late_in: bool
    is_early_out: bool
    status: SessionStatus
    punch_cycles: tuple[PunchCycle, ...] = ()


@dataclass(frozen=True)
class WorkStatus:
    can_punch_in: bool
    can_punch_out: bool
    can_start_break: bool
    can_end_break: bool
    current_status: WorkState
    last_action: Optional[PunchEvent] = None

    @classmethod
    def unavailable(cls) -> "WorkStatus":
        """Safe default when today's events could not be loaded."""
        return cls(
            can_punch_in=False,
            can_punch_out=False,
            can_start_break=False,
            can_end_break=False,
            current_status=WorkState.NOT_STARTED,
        )

    def allows(self, event_type: EventType) -> bool:
        return {
            EventType.PUNCH_IN: self.can_punch_in,
            EventType.PUNCH_OUT: self.can_punch_out,
            EventType.BREAK_START: self.can_start_break,
            EventType.BREAK_END: self.can_end_break,
        }[event_type]


@dataclass(frozen=True)
class DailyBreakdown:
    date: date
    day_name: str
    hours: float
    break_time: float
    is_late: bool
    is_early: bool
    punch_in: Optional[datetime]
    punch_out: Optional[datetime]


@dataclass(frozen=True)
class WeeklySummary:
    employee_id: str
    week_start: date
    week_end: date
    total_hours: float
    total_break_time: float
    days_worked: int
    average_hours_per_day: float
    daily_breakdown: tuple[DailyBreakdown, ...] = ()


@dataclass(frozen=True)
class EmployeeStats:
    employee_id: str
    sessions: int
    total_hours: float
    average_hours: float
    late_count: int
    early_count: int
    punch_cycles: int
    attendance_rate: float


@dataclass(frozen=True)
class DailyTotal:
    date: date
    hours: float
    cycles: int


@dataclass(frozen=True)
class ReportOverview:
    """Dashboard-level aggregates over a session collection."""

    total_sessions: int
    total_working_hours: float
    total_break_time: float
    late_arrivals: int
    early_departures: int
    average_hours_per_day: float
    total_punch_cycles: int
    employee_stats: tuple[EmployeeStats, ...] = ()
    daily_totals: tuple[DailyTotal, ...] = ()
