from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import BusinessHours, PunchEvent
from .normalize import normalize_business_hours, normalize_event
from .repository import BusinessHoursRepository, PunchEventRepository

_EVENT_COLUMNS = "event_id, employee_id, event_type, event_time, is_late, is_early, notes"


class MySQLPunchEventRepository(PunchEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[PunchEvent]:
        # Half-open range on event_time keeps the index usable.
        clauses = ["event_time >= %s", "event_time < %s"]
        params: list[object] = [
            datetime.combine(start_date, time.min),
            datetime.combine(end_date + timedelta(days=1), time.min),
        ]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM punch_events
                WHERE {where}
                ORDER BY event_time ASC, event_id ASC
                """,
                tuple(params),
            )
            return [normalize_event(r) for r in fetchall(cur)]

    def list_for_employee_on(self, employee_id: str, work_date: date) -> Sequence[PunchEvent]:
        return self.list_between(start_date=work_date, end_date=work_date, employee_id=employee_id)

    def add(self, event: PunchEvent) -> PunchEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punch_events(employee_id, event_type, event_time, is_late, is_early, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.employee_id,
                    event.type.value,
                    event.timestamp,
                    int(event.is_late),
                    int(event.is_early),
                    event.notes,
                ),
            )
            event_id = int(cur.lastrowid)

        return PunchEvent(
            employee_id=event.employee_id,
            type=event.type,
            timestamp=event.timestamp,
            is_late=event.is_late,
            is_early=event.is_early,
            event_id=event_id,
            notes=event.notes,
        )


class MySQLBusinessHoursRepository(BusinessHoursRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current(self) -> Optional[BusinessHours]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT start_time, end_time, break_duration, late_threshold
                FROM business_hours
                ORDER BY hours_id DESC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return normalize_business_hours(
                {
                    "start_time": normalize_mysql_time(r["start_time"]),
                    "end_time": normalize_mysql_time(r["end_time"]),
                    "break_duration": r["break_duration"],
                    "late_threshold": r["late_threshold"],
                }
            )

    def save(self, hours: BusinessHours) -> None:
        # Append-only: the latest row is the current configuration.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO business_hours(start_time, end_time, break_duration, late_threshold)
                VALUES(%s,%s,%s,%s)
                """,
                (hours.start_time, hours.end_time, hours.break_duration, hours.late_threshold),
            )
