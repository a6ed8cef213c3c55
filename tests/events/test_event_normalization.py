from datetime import datetime, time, timezone

import pytest

from timeclock.core.enums import EventType
from timeclock.core.exceptions import ValidationError
from timeclock.events.normalize import normalize_business_hours, normalize_event


def test_camel_and_snake_case_give_the_same_event():
    camel = normalize_event(
        {"employeeId": "7", "type": "punch_in", "timestamp": "2026-03-02T09:20:00", "isLate": True}
    )
    snake = normalize_event(
        {"employee_id": "7", "type": "punch_in", "timestamp": datetime(2026, 3, 2, 9, 20), "is_late": 1}
    )

    assert camel == snake
    assert camel.type == EventType.PUNCH_IN
    assert camel.is_late is True
    assert camel.is_early is False


def test_database_row_shape_is_accepted():
    event = normalize_event(
        {
            "event_id": 42,
            "employee_id": 3,
            "event_type": "break_start",
            "event_time": datetime(2026, 3, 2, 12, 0),
            "is_late": 0,
            "is_early": 0,
            "notes": None,
        }
    )

    assert event.event_id == 42
    assert event.employee_id == "3"
    assert event.type == EventType.BREAK_START


def test_utc_suffix_is_parsed():
    event = normalize_event({"employee": "1", "type": "punch_out", "timestamp": "2026-03-02T17:00:00Z"})

    assert event.timestamp == datetime(2026, 3, 2, 17, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "raw",
    [
        {"employeeId": "1", "type": "lunch", "timestamp": "2026-03-02T09:00:00"},
        {"employeeId": "1", "type": "punch_in", "timestamp": "yesterday"},
        {"employeeId": "", "type": "punch_in", "timestamp": "2026-03-02T09:00:00"},
        {"employeeId": "1", "type": "punch_in"},
    ],
)
def test_malformed_input_is_rejected_at_the_edge(raw):
    with pytest.raises(ValidationError):
        normalize_event(raw)


def test_business_hours_from_either_spelling():
    hours = normalize_business_hours({"startTime": "08:30", "endTime": "16:30", "lateThreshold": 10})
    same = normalize_business_hours({"start_time": time(8, 30), "end_time": "16:30:00", "late_threshold": "10"})

    assert hours == same
    assert hours.break_duration == 60
    assert hours.late_threshold == 10


def test_business_hours_reject_bad_values():
    with pytest.raises(ValidationError):
        normalize_business_hours({"startTime": "9am", "endTime": "17:00"})
    with pytest.raises(ValidationError):
        normalize_business_hours({"startTime": "09:00", "endTime": "17:00", "breakDuration": -5})
