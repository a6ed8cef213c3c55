from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ..model import BusinessHours


@dataclass(frozen=True)
class FlagDecision:
    is_late: bool = False
    is_early: bool = False


class PunchFlagStrategy(ABC):
    """Strategy Pattern: encapsulate how a new punch is flagged."""

    @abstractmethod
    def decide(self, *, timestamp: datetime, hours: BusinessHours) -> FlagDecision:
        raise NotImplementedError
