from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import Clock, now_local
from ..core.enums import EventType
from ..core.exceptions import PunchNotAllowedError, UpstreamError, ValidationError
from ..employees.repository import EmployeeRepository
from ..events.factory import PunchFlagStrategyFactory
from ..events.model import BusinessHours, PunchEvent
from ..events.normalize import normalize_business_hours
from ..events.repository import BusinessHoursRepository, PunchEventRepository
from ..sessions.builder import build_session
from ..sessions.model import WorkSession, WorkStatus
from ..sessions.status import evaluate_status

logger = logging.getLogger(__name__)


class TimeTrackingService:
    def __init__(
        self,
        events: PunchEventRepository,
        hours: BusinessHoursRepository,
        employees: EmployeeRepository,
        *,
        default_hours: BusinessHours,
        clock: Clock = now_local,
        strategy_factory: PunchFlagStrategyFactory | None = None,
    ):
        self._events = events
        self._hours = hours
        self._employees = employees
        self._default_hours = default_hours
        self._clock = clock
        self._factory = strategy_factory or PunchFlagStrategyFactory()
        self._punch_lock = threading.Lock()

    def _todays_events(self, employee_id: str, now: datetime):
        return self._events.list_for_employee_on(employee_id, now.date())

    def get_status(self, employee_id: str, *, now: datetime | None = None) -> WorkStatus:
        now = now or self._clock()
        try:
            events = self._todays_events(employee_id, now)
        except UpstreamError as exc:
            logger.warning("Could not load events for employee %s: %s", employee_id, exc)
            return WorkStatus.unavailable()
        return evaluate_status(employee_id, events)

    def get_current_session(self, employee_id: str, *, now: datetime | None = None) -> Optional[WorkSession]:
        now = now or self._clock()
        try:
            events = self._todays_events(employee_id, now)
        except UpstreamError as exc:
            logger.warning("Could not load events for employee %s: %s", employee_id, exc)
            return None
        return build_session(employee_id, now.date(), events, now=now)

    def get_business_hours(self) -> BusinessHours:
        try:
            return self._hours.get_current() or self._default_hours
        except UpstreamError as exc:
            logger.warning("Business hours unavailable, using defaults: %s", exc)
            return self._default_hours

    def update_business_hours(self, raw: Mapping[str, Any]) -> BusinessHours:
        hours = normalize_business_hours(raw)
        self._hours.save(hours)
        logger.info("Business hours updated to %s-%s", hours.start_time, hours.end_time)
        return hours

    def record_punch(
        self,
        employee_id: str,
        event_type: EventType,
        *,
        now: datetime | None = None,
        notes: str | None = None,
    ) -> PunchEvent:
        """Admit and persist one punch action.

        Raises ValidationError for an employee missing from the directory,
        PunchNotAllowedError when today's state forbids the action, and lets
        UpstreamError through when a source cannot be reached.
        """
        with self._punch_lock:
            now = now or self._clock()
            if self._employees.get_by_id(employee_id) is None:
                raise ValidationError(f"Unknown employee: {employee_id!r}")
            status = evaluate_status(employee_id, self._todays_events(employee_id, now))
            if not status.allows(event_type):
                logger.warning(
                    "Rejected %s for employee %s (status=%s)",
                    event_type.value,
                    employee_id,
                    status.current_status.value,
                )
                raise PunchNotAllowedError(
                    f"Cannot {event_type.value.replace('_', ' ')} while {status.current_status.value.replace('_', ' ')}"
                )

            decision = self._factory.decide(event_type=event_type, timestamp=now, hours=self.get_business_hours())
            event = self._events.add(
                PunchEvent(
                    employee_id=employee_id,
                    type=event_type,
                    timestamp=now,
                    is_late=decision.is_late,
                    is_early=decision.is_early,
                    notes=notes,
                )
            )

        logger.info("Recorded %s for employee %s at %s", event_type.value, employee_id, now.isoformat())
        return event
