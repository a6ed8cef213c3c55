from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..core.exceptions import UpstreamError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..events.model import PunchEvent
from ..events.repository import PunchEventRepository
from ..sessions.aggregator import build_sessions, summarize_sessions, week_window, weekly_summary
from ..sessions.model import ReportOverview, WeeklySummary, WorkSession
from .exporter import export_csv

logger = logging.getLogger(__name__)


class ReportService:
    """Read side: sessions, weekly rollups, overview statistics and CSV.

    Every method degrades to an empty result when a source is unreachable.
    """

    def __init__(
        self,
        events: PunchEventRepository,
        employees: EmployeeRepository,
        *,
        clock: Clock = now_local,
    ):
        self._events = events
        self._employees = employees
        self._clock = clock

    def _load_events(self, start: date, end: date, employee_id: Optional[str]) -> Sequence[PunchEvent]:
        try:
            return self._events.list_between(start_date=start, end_date=end, employee_id=employee_id)
        except UpstreamError as exc:
            logger.warning("Could not load events %s..%s: %s", start, end, exc)
            return []

    def _directory(self) -> dict[str, Employee]:
        try:
            return {e.employee_id: e for e in self._employees.list_all()}
        except UpstreamError as exc:
            logger.warning("Employee directory unavailable: %s", exc)
            return {}

    def list_sessions(
        self,
        start: date,
        end: date,
        *,
        employee_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> list[WorkSession]:
        now = now or self._clock()
        events = self._load_events(start, end, employee_id)
        return build_sessions(events, start, end, now=now)

    def weekly_summary(
        self,
        employee_id: str,
        *,
        as_of: date | None = None,
        now: datetime | None = None,
    ) -> WeeklySummary:
        now = now or self._clock()
        as_of = as_of or now.date()
        week_start, week_end = week_window(as_of)
        events = self._load_events(week_start, week_end, employee_id)
        return weekly_summary(employee_id, as_of, events, now=now)

    def overview(
        self,
        start: date,
        end: date,
        *,
        employee_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> ReportOverview:
        return summarize_sessions(self.list_sessions(start, end, employee_id=employee_id, now=now))

    def export_csv(
        self,
        start: date,
        end: date,
        *,
        employee_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> str:
        sessions = self.list_sessions(start, end, employee_id=employee_id, now=now)
        return export_csv(sessions, self._directory())
