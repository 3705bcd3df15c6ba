from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimingDecision:
    late_minutes: int = 0
    overtime_minutes: int = 0
    early_leave_minutes: int = 0


def whole_minutes(later: datetime, earlier: datetime) -> int:
    """Completed minutes from ``earlier`` to ``later`` (never negative)."""
    return max(int((later - earlier).total_seconds() // 60), 0)


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how attendance timing is derived."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, scheduled_start: datetime) -> TimingDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(self, *, now: datetime, scheduled_end: datetime, late_minutes: int) -> TimingDecision:
        raise NotImplementedError
