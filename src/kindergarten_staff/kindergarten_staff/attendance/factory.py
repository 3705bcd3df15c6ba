from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, scheduled_start: datetime) -> AttendanceStrategy:
        if now > scheduled_start:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, now: datetime, scheduled_end: datetime) -> AttendanceStrategy:
        if now < scheduled_end:
            return EarlyLeaveStrategy()
        if now > scheduled_end:
            return OvertimeStrategy()
        return NormalStrategy()
