from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import EventType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one recorded punch action.

    ``is_late`` is only meaningful for punch-ins and ``is_early`` only for
    punch-outs; both are decided once, when the event is recorded.
    """

    employee_id: str
    type: EventType
    timestamp: datetime
    is_late: bool = False
    is_early: bool = False
    event_id: Optional[int] = None
    notes: Optional[str] = None

    @property
    def work_date(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class BusinessHours:
    """Nominal same-day shift used to flag late arrivals and early departures."""

    start_time: time
    end_time: time
    break_duration: int = 60
    late_threshold: int = 15

    def __post_init__(self) -> None:
        if self.start_time >= self.end_time:
            raise ValidationError("Business hours must start before they end")
        if self.break_duration < 0 or self.late_threshold < 0:
            raise ValidationError("Break duration and late threshold must not be negative")

    def shift_start_for(self, moment: datetime) -> datetime:
        return datetime.combine(moment.date(), self.start_time, tzinfo=moment.tzinfo)

    def shift_end_for(self, moment: datetime) -> datetime:
        return datetime.combine(moment.date(), self.end_time, tzinfo=moment.tzinfo)
