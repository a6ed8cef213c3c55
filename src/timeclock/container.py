from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .common.datetime_utils import Clock, now_local
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .events.factory import PunchFlagStrategyFactory
from .events.mysql_event_repository import MySQLBusinessHoursRepository, MySQLPunchEventRepository
from .events.normalize import normalize_business_hours
from .reports.service import ReportService
from .timetracking.service import TimeTrackingService


@dataclass(frozen=True)
class Container:
    clock: Clock

    time_tracking_service: TimeTrackingService
    report_service: ReportService


def build_container(
    *,
    db_config: dict,
    default_business_hours: Mapping[str, Any],
    clock: Clock = now_local,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    events_repo = MySQLPunchEventRepository(conn)
    hours_repo = MySQLBusinessHoursRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)

    time_tracking_service = TimeTrackingService(
        events_repo,
        hours_repo,
        employees_repo,
        default_hours=normalize_business_hours(default_business_hours),
        clock=clock,
        strategy_factory=PunchFlagStrategyFactory(),
    )
    report_service = ReportService(events_repo, employees_repo, clock=clock)

    return Container(
        clock=clock,
        time_tracking_service=time_tracking_service,
        report_service=report_service,
    )
