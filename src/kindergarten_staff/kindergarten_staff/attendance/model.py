from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import Period
from ..core.enums import AttendanceMark
from ..core.exceptions import ValidationError
from ..shifts.model import Shift


@dataclass(frozen=True)
class AttendanceSummary:
    """Derived counts for one staff member over a period."""

    staff_id: str
    period: Period
    present_count: int = 0
    late_count: int = 0
    no_show_count: int = 0
    total_late_minutes: int = 0
    total_overtime_minutes: int = 0
    total_early_leave_minutes: int = 0
    late_minutes_by_shift: tuple[int, ...] = ()
    shifts: tuple[Shift, ...] = field(default=(), repr=False)

    def __post_init__(self):
        # totals must agree with the per-shift list
        if len(self.late_minutes_by_shift) != self.late_count:
            raise ValidationError(
                f"late_count {self.late_count} does not match {len(self.late_minutes_by_shift)} late shifts"
            )
        if sum(self.late_minutes_by_shift) != self.total_late_minutes:
            raise ValidationError(
                f"total_late_minutes {self.total_late_minutes} does not match the per-shift late minutes"
            )
        if any(m <= 0 for m in self.late_minutes_by_shift):
            raise ValidationError("late_minutes_by_shift must only hold positive values")

    def to_dict(self) -> dict:
        return {
            "staffId": self.staff_id,
            "period": self.period.label,
            "presentCount": self.present_count,
            "lateCount": self.late_count,
            "noShowCount": self.no_show_count,
            "totalLateMinutes": self.total_late_minutes,
            "totalOvertimeMinutes": self.total_overtime_minutes,
            "totalEarlyLeaveMinutes": self.total_early_leave_minutes,
        }


@dataclass(frozen=True)
class BulkAttendanceRecord:
    """One row of a bulk save: a status for one subject on one date."""

    subject_id: str
    work_date: date
    status: AttendanceMark
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "subjectId": self.subject_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class BulkSaveError:
    index: int
    subject_id: Optional[str]
    message: str

    def to_dict(self) -> dict:
        return {"index": self.index, "subjectId": self.subject_id, "error": self.message}


@dataclass(frozen=True)
class BulkSaveResult:
    success_count: int
    error_count: int
    errors: tuple[BulkSaveError, ...] = ()
    records: tuple[BulkAttendanceRecord, ...] = ()

    @property
    def has_failures(self) -> bool:
        return self.error_count > 0

    def to_dict(self) -> dict:
        return {
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
            "records": [r.to_dict() for r in self.records],
        }
