from __future__ import annotations

from datetime import datetime

from ..model import BusinessHours
from .base import FlagDecision, PunchFlagStrategy


class LateArrivalStrategy(PunchFlagStrategy):
    """Punch-in after the grace period."""

    def decide(self, *, timestamp: datetime, hours: BusinessHours) -> FlagDecision:
        return FlagDecision(is_late=True)
