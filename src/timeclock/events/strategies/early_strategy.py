from __future__ import annotations

from datetime import datetime

from ..model import BusinessHours
from .base import FlagDecision, PunchFlagStrategy


class EarlyDepartureStrategy(PunchFlagStrategy):
    """Punch-out before the shift ends."""

    def decide(self, *, timestamp: datetime, hours: BusinessHours) -> FlagDecision:
        return FlagDecision(is_early=True)
