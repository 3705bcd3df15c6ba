from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, TimingDecision, whole_minutes


class EarlyLeaveStrategy(AttendanceStrategy):
    """Check-out before the scheduled end."""

    def decide_checkin(self, *, now: datetime, scheduled_start: datetime) -> TimingDecision:
        return TimingDecision()

    def decide_checkout(self, *, now: datetime, scheduled_end: datetime, late_minutes: int) -> TimingDecision:
        return TimingDecision(late_minutes=late_minutes, early_leave_minutes=whole_minutes(scheduled_end, now))
