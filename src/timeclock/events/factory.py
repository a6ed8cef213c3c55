from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.enums import EventType
from .model import BusinessHours
from .strategies.base import FlagDecision, PunchFlagStrategy
from .strategies.early_strategy import EarlyDepartureStrategy
from .strategies.late_strategy import LateArrivalStrategy
from .strategies.normal_strategy import NormalFlagStrategy


@dataclass
class PunchFlagStrategyFactory:
    """Factory Pattern: choose the flagging strategy for a new punch.

    Shift boundaries are taken on the punch's own calendar date.
    """

    def for_event(self, *, event_type: EventType, timestamp: datetime, hours: BusinessHours) -> PunchFlagStrategy:
        if event_type == EventType.PUNCH_IN:
            threshold = hours.shift_start_for(timestamp) + timedelta(minutes=hours.late_threshold)
            if timestamp > threshold:
                return LateArrivalStrategy()
            return NormalFlagStrategy()

        if event_type == EventType.PUNCH_OUT:
            if timestamp < hours.shift_end_for(timestamp):
                return EarlyDepartureStrategy()
            return NormalFlagStrategy()

        return NormalFlagStrategy()

    def decide(self, *, event_type: EventType, timestamp: datetime, hours: BusinessHours) -> FlagDecision:
        strategy = self.for_event(event_type=event_type, timestamp=timestamp, hours=hours)
        return strategy.decide(timestamp=timestamp, hours=hours)
