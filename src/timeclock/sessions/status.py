from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..core.enums import EventType, WorkState
from ..events.model import PunchEvent
from .model import WorkStatus


def evaluate_status(employee_id: str, todays_events: Iterable[PunchEvent]) -> WorkStatus:
    """Decide which punch actions are legal right now.

    Depends only on how many events of each kind the employee has today.
    This is the single admission-control rule for punch actions.
    """
    events = sorted((e for e in todays_events if e.employee_id == employee_id), key=lambda e: e.timestamp)
    counts = Counter(e.type for e in events)
    last_action = events[-1] if events else None

    is_punched_in = counts[EventType.PUNCH_IN] > counts[EventType.PUNCH_OUT]
    is_on_break = counts[EventType.BREAK_START] > counts[EventType.BREAK_END]

    if not is_punched_in:
        state = WorkState.FINISHED if counts[EventType.PUNCH_OUT] > 0 else WorkState.NOT_STARTED
        return WorkStatus(
            can_punch_in=True,
            can_punch_out=False,
            can_start_break=False,
            can_end_break=False,
            current_status=state,
            last_action=last_action,
        )

    if is_on_break:
        return WorkStatus(
            can_punch_in=False,
            can_punch_out=False,
            can_start_break=False,
            can_end_break=True,
            current_status=WorkState.ON_BREAK,
            last_action=last_action,
        )

    return WorkStatus(
        can_punch_in=False,
        can_punch_out=True,
        can_start_break=True,
        can_end_break=False,
        current_status=WorkState.WORKING,
        last_action=last_action,
    )
