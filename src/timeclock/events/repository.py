from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import BusinessHours, PunchEvent


class PunchEventRepository(Protocol):
    """Event source. Implementations raise UpstreamError on I/O failure."""

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def list_for_employee_on(self, employee_id: str, work_date: date) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def add(self, event: PunchEvent) -> PunchEvent:
        """Persist a new event and return it with its assigned id."""

        raise NotImplementedError


class BusinessHoursRepository(Protocol):
    def get_current(self) -> Optional[BusinessHours]:
        raise NotImplementedError

    def save(self, hours: BusinessHours) -> None:
        raise NotImplementedError
