from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """Kinds of punch events an employee can record."""

    PUNCH_IN = "punch_in"
    PUNCH_OUT = "punch_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class SessionStatus(str, Enum):
    """State of a derived work session."""

    COMPLETE = "complete"
    IN_PROGRESS = "in_progress"
    ON_BREAK = "on_break"


class WorkState(str, Enum):
    """Live punch state of an employee for the current day."""

    NOT_STARTED = "not_started"
    WORKING = "working"
    ON_BREAK = "on_break"
    FINISHED = "finished"
