from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, TimingDecision, whole_minutes


class OvertimeStrategy(AttendanceStrategy):
    """Check-out after the scheduled end.

    Minutes past the end first make up for a late arrival; only the remainder
    counts as overtime.
    """

    def decide_checkin(self, *, now: datetime, scheduled_start: datetime) -> TimingDecision:
        return TimingDecision()

    def decide_checkout(self, *, now: datetime, scheduled_end: datetime, late_minutes: int) -> TimingDecision:
        extra = whole_minutes(now, scheduled_end) - late_minutes
        return TimingDecision(late_minutes=late_minutes, overtime_minutes=max(extra, 0))
