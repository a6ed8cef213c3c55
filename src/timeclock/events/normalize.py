"""Ingestion boundary: external records into canonical domain types.

Event sources, request bodies and database rows may spell fields in
camelCase or snake_case. Everything past this module works on
``PunchEvent`` and ``BusinessHours`` only.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_clock_time, parse_iso_datetime
from ..common.validators import pick, require_non_empty, require_non_negative
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES
from ..core.enums import EventType
from ..core.exceptions import ValidationError
from .model import BusinessHours, PunchEvent


def parse_event_type(value: Any) -> EventType:
    if isinstance(value, EventType):
        return value
    try:
        return EventType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown punch type: {value!r}") from None


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_datetime(value)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}") from None
    raise ValidationError(f"Invalid timestamp: {value!r}")


def parse_time_of_day(value: Any, field_name: str) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        try:
            return parse_clock_time(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be HH:MM") from None
    raise ValidationError(f"{field_name} must be HH:MM")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    return bool(value)


def normalize_event(raw: Mapping[str, Any]) -> PunchEvent:
    """Build a PunchEvent from any accepted external representation."""
    employee_id = require_non_empty(pick(raw, "employee_id", "employeeId", "employee", default=""), "employee_id")
    event_type = parse_event_type(pick(raw, "type", "event_type", "eventType"))
    timestamp = parse_timestamp(pick(raw, "timestamp", "event_time", "eventTime"))

    event_id: Optional[int] = pick(raw, "event_id", "eventId", "id")
    notes = pick(raw, "notes", "note")

    return PunchEvent(
        employee_id=employee_id,
        type=event_type,
        timestamp=timestamp,
        is_late=_as_bool(pick(raw, "is_late", "isLate", default=False)),
        is_early=_as_bool(pick(raw, "is_early", "isEarly", default=False)),
        event_id=int(event_id) if event_id is not None else None,
        notes=str(notes) if notes else None,
    )


def normalize_business_hours(raw: Mapping[str, Any]) -> BusinessHours:
    """Build BusinessHours from settings, request bodies or database rows."""
    start = parse_time_of_day(pick(raw, "start_time", "startTime"), "start_time")
    end = parse_time_of_day(pick(raw, "end_time", "endTime"), "end_time")
    break_duration = require_non_negative(
        pick(raw, "break_duration", "breakDuration", default=DEFAULT_BREAK_MINUTES), "break_duration"
    )
    late_threshold = require_non_negative(
        pick(raw, "late_threshold", "lateThreshold", default=DEFAULT_LATE_THRESHOLD_MINUTES), "late_threshold"
    )
    return BusinessHours(
        start_time=start,
        end_time=end,
        break_duration=break_duration,
        late_threshold=late_threshold,
    )


def business_hours_to_dict(hours: BusinessHours) -> dict:
    return {
        "start_time": hours.start_time.strftime("%H:%M"),
        "end_time": hours.end_time.strftime("%H:%M"),
        "break_duration": hours.break_duration,
        "late_threshold": hours.late_threshold,
    }


def event_to_dict(event: PunchEvent) -> dict:
    return {
        "event_id": event.event_id,
        "employee_id": event.employee_id,
        "type": event.type.value,
        "timestamp": event.timestamp.isoformat(),
        "is_late": event.is_late,
        "is_early": event.is_early,
        "notes": event.notes,
    }
