"""Reconstruct one employee's work day from raw punch events.

Pairing is positional: the i-th punch-in (in time order) closes with the
i-th punch-out, and the i-th break start with the i-th break end. Punch-outs
that were skipped or recorded out of order therefore shift the pairing of
every later cycle. Historical reports depend on this, so it is kept as is.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import hours_between, minutes_between
from ..core.enums import EventType, SessionStatus
from ..events.model import PunchEvent
from .model import PunchCycle, WorkSession


def chronological(events: Iterable[PunchEvent], event_type: EventType) -> list[PunchEvent]:
    return sorted((e for e in events if e.type == event_type), key=lambda e: e.timestamp)


def break_minutes_within(
    cycle_start: datetime,
    cycle_end: datetime,
    break_starts: Sequence[PunchEvent],
    break_ends: Sequence[PunchEvent],
) -> float:
    """Minutes of break whose start falls inside ``[cycle_start, cycle_end]``.

    A break with no end, or ending after ``cycle_end``, runs until ``cycle_end``.
    """
    minutes = 0.0
    for index, start in enumerate(break_starts):
        begin = start.timestamp
        if not cycle_start <= begin <= cycle_end:
            continue
        end = break_ends[index].timestamp if index < len(break_ends) else cycle_end
        minutes += minutes_between(begin, min(end, cycle_end))
    return minutes


def is_break_open(break_starts: Sequence[PunchEvent], break_ends: Sequence[PunchEvent]) -> bool:
    if not break_starts:
        return False
    if not break_ends:
        return True
    return break_starts[-1].timestamp > break_ends[-1].timestamp


def build_cycles(punch_ins: Sequence[PunchEvent], punch_outs: Sequence[PunchEvent]) -> tuple[PunchCycle, ...]:
    cycles = []
    for index, punch_in in enumerate(punch_ins):
        punch_out = punch_outs[index] if index < len(punch_outs) else None
        cycles.append(
            PunchCycle(
                punch_in=punch_in.timestamp,
                punch_out=punch_out.timestamp if punch_out else None,
                is_late_in=punch_in.is_late,
                is_early_out=punch_out.is_early if punch_out else False,
            )
        )
    return tuple(cycles)


def build_session(
    employee_id: str,
    day: date,
    events: Iterable[PunchEvent],
    *,
    now: datetime,
) -> Optional[WorkSession]:
    """Derive the WorkSession for ``employee_id`` on ``day``.

    ``now`` only matters while the day is open (last punch-in not closed);
    it is where the live cycle and any running break are measured to.
    Returns None when the day has no punch-in.
    """
    events = list(events)
    punch_ins = chronological(events, EventType.PUNCH_IN)
    if not punch_ins:
        return None

    punch_outs = chronological(events, EventType.PUNCH_OUT)
    break_starts = chronological(events, EventType.BREAK_START)
    break_ends = chronological(events, EventType.BREAK_END)

    working_hours = 0.0
    break_total = 0.0

    for punch_in, punch_out in zip(punch_ins, punch_outs):
        cycle_break = break_minutes_within(punch_in.timestamp, punch_out.timestamp, break_starts, break_ends)
        break_total += cycle_break
        cycle_hours = hours_between(punch_in.timestamp, punch_out.timestamp)
        working_hours += max(0.0, cycle_hours - cycle_break / 60.0)

    first_in = punch_ins[0]
    last_in = punch_ins[-1]
    last_out = punch_outs[-1] if punch_outs else None
    is_open = last_out is None or last_in.timestamp > last_out.timestamp

    status = SessionStatus.COMPLETE
    if is_open:
        live_end = max(now, last_in.timestamp)
        live_break = break_minutes_within(last_in.timestamp, live_end, break_starts, break_ends)
        break_total += live_break
        working_hours += max(0.0, hours_between(last_in.timestamp, live_end) - live_break / 60.0)
        day_end = live_end
        status = SessionStatus.ON_BREAK if is_break_open(break_starts, break_ends) else SessionStatus.IN_PROGRESS
    else:
        day_end = last_out.timestamp

    return WorkSession(
        employee_id=employee_id,
        date=day,
        punch_in=first_in.timestamp,
        punch_out=None if is_open else last_out.timestamp,
        break_start=break_starts[0].timestamp if break_starts else None,
        break_end=break_ends[0].timestamp if break_ends else None,
        total_hours=max(0.0, hours_between(first_in.timestamp, day_end)),
        break_duration=break_total,
        working_hours=working_hours,
        is_late_in=first_in.is_late,
        is_early_out=False if is_open else last_out.is_early,
        status=status,
        punch_cycles=build_cycles(punch_ins, punch_outs),
    )
