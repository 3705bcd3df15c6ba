from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, TimingDecision, whole_minutes


class LateStrategy(AttendanceStrategy):
    """Check-in after the scheduled start."""

    def decide_checkin(self, *, now: datetime, scheduled_start: datetime) -> TimingDecision:
        return TimingDecision(late_minutes=whole_minutes(now, scheduled_start))

    def decide_checkout(self, *, now: datetime, scheduled_end: datetime, late_minutes: int) -> TimingDecision:
        return TimingDecision(late_minutes=late_minutes)
