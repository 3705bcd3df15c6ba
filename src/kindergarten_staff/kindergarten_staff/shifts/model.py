from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..common.refs import resolve_id
from ..core.constants import DEFAULT_WORK_END, DEFAULT_WORK_START
from ..core.enums import ShiftStatus, ShiftType
from ..geo.distance import Coordinate


@dataclass(frozen=True)
class WorkingHoursConfig:
    """Fallback bounds for shifts scheduled without explicit times."""

    default_start: time
    default_end: time

    @classmethod
    def from_strings(cls, start: Optional[str], end: Optional[str]) -> "WorkingHoursConfig":
        return cls(
            default_start=parse_hhmm(start or DEFAULT_WORK_START),
            default_end=parse_hhmm(end or DEFAULT_WORK_END),
        )

    @classmethod
    def default(cls) -> "WorkingHoursConfig":
        return cls.from_strings(DEFAULT_WORK_START, DEFAULT_WORK_END)


@dataclass(frozen=True)
class Shift:
    """Domain entity: one staff member's scheduled work period on one date.

    Instances are immutable; transitions return a new instance.
    """

    shift_id: str
    staff_id: str
    work_date: date
    scheduled_start: Optional[time] = None
    scheduled_end: Optional[time] = None
    shift_type: ShiftType = ShiftType.FULL
    status: ShiftStatus = ShiftStatus.SCHEDULED
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    late_minutes: int = 0
    overtime_minutes: int = 0
    early_leave_minutes: int = 0
    check_in_location: Optional[Coordinate] = None
    check_out_location: Optional[Coordinate] = None
    notes: Optional[str] = None

    def bounds(self, working_hours: WorkingHoursConfig) -> tuple[time, time]:
        return (
            self.scheduled_start or working_hours.default_start,
            self.scheduled_end or working_hours.default_end,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "staffId": self.staff_id,
            "date": self.work_date.isoformat(),
            "startTime": self.scheduled_start.strftime("%H:%M") if self.scheduled_start else None,
            "endTime": self.scheduled_end.strftime("%H:%M") if self.scheduled_end else None,
            "type": self.shift_type.value,
            "status": self.status.value,
            "actualStart": self.actual_start.isoformat() if self.actual_start else None,
            "actualEnd": self.actual_end.isoformat() if self.actual_end else None,
            "lateMinutes": self.late_minutes,
            "overtimeMinutes": self.overtime_minutes,
            "earlyLeaveMinutes": self.early_leave_minutes,
            "checkInLocation": self.check_in_location.to_dict() if self.check_in_location else None,
            "checkOutLocation": self.check_out_location.to_dict() if self.check_out_location else None,
            "notes": self.notes,
        }


def _parse_datetime(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _parse_location(value) -> Optional[Coordinate]:
    if not value:
        return None
    return Coordinate(latitude=float(value["latitude"]), longitude=float(value["longitude"]))


def shift_from_document(doc: dict) -> Shift:
    """Build a ``Shift`` from a backend document.

    ``staffId`` may be a bare id or an embedded staff object; both resolve to
    the plain id here so nothing downstream sees the embedded form.
    """
    work_date = doc["date"]
    if not isinstance(work_date, date):
        work_date = date.fromisoformat(str(work_date)[:10])
    return Shift(
        shift_id=resolve_id(doc.get("id") or doc.get("_id")),
        staff_id=resolve_id(doc["staffId"]),
        work_date=work_date,
        scheduled_start=parse_hhmm(doc.get("startTime")),
        scheduled_end=parse_hhmm(doc.get("endTime")),
        shift_type=ShiftType(doc.get("type") or doc.get("shiftType") or ShiftType.FULL.value),
        status=ShiftStatus(doc.get("status") or ShiftStatus.SCHEDULED.value),
        actual_start=_parse_datetime(doc.get("actualStart")),
        actual_end=_parse_datetime(doc.get("actualEnd")),
        late_minutes=max(int(doc.get("lateMinutes") or 0), 0),
        overtime_minutes=max(int(doc.get("overtimeMinutes") or 0), 0),
        early_leave_minutes=max(int(doc.get("earlyLeaveMinutes") or 0), 0),
        check_in_location=_parse_location(doc.get("checkInLocation")),
        check_out_location=_parse_location(doc.get("checkOutLocation")),
        notes=doc.get("notes"),
    )
