from __future__ import annotations

from datetime import datetime

from ..model import BusinessHours
from .base import FlagDecision, PunchFlagStrategy


class NormalFlagStrategy(PunchFlagStrategy):
    """On-time punch-in, on-time punch-out, or any break event."""

    def decide(self, *, timestamp: datetime, hours: BusinessHours) -> FlagDecision:
        return FlagDecision()
