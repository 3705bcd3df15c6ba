from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from ..common.datetime_utils import Period
from ..common.refs import resolve_id
from ..core.enums import ShiftStatus
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .model import AttendanceSummary

logger = logging.getLogger(__name__)

_PRESENT = frozenset({ShiftStatus.IN_PROGRESS, ShiftStatus.COMPLETED})


def summarize_shifts(staff_id: str, period: Period, shifts: Iterable[Shift]) -> AttendanceSummary:
    """Fold shifts into an ``AttendanceSummary``.

    Shifts of other staff or outside the period are ignored. Cancelled shifts
    are dropped entirely, so their late minutes never count. Any other shift
    with ``late_minutes > 0`` is a late occurrence, a no-show included.
    """
    relevant = sorted(
        (
            s
            for s in shifts
            if s.staff_id == staff_id and s.work_date in period and s.status != ShiftStatus.CANCELLED
        ),
        key=lambda s: (s.work_date, s.shift_id),
    )

    late = [s.late_minutes for s in relevant if s.late_minutes > 0]
    return AttendanceSummary(
        staff_id=staff_id,
        period=period,
        present_count=sum(1 for s in relevant if s.status in _PRESENT),
        late_count=len(late),
        no_show_count=sum(1 for s in relevant if s.status == ShiftStatus.NO_SHOW),
        total_late_minutes=sum(late),
        total_overtime_minutes=sum(s.overtime_minutes for s in relevant),
        total_early_leave_minutes=sum(s.early_leave_minutes for s in relevant),
        late_minutes_by_shift=tuple(late),
        shifts=tuple(relevant),
    )


class AttendanceAggregator:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def summarize(self, staff_id: Any, period_start: date, period_end: date) -> AttendanceSummary:
        staff = resolve_id(staff_id)
        period = Period(start=period_start, end=period_end)
        shifts = self._shifts.list_for_staff_in_range(staff, period.start, period.end)
        summary = summarize_shifts(staff, period, shifts)
        logger.debug(
            "summary for %s %s: present=%d late=%d no_show=%d",
            staff,
            period.label,
            summary.present_count,
            summary.late_count,
            summary.no_show_count,
        )
        return summary
