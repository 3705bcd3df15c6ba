from __future__ import annotations

from enum import Enum


class ShiftStatus(str, Enum):
    """Lifecycle states of a scheduled shift."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    LATE = "late"
    NO_SHOW = "no_show"
    CANCELLED = "cancelled"
    PENDING_APPROVAL = "pending_approval"


# Virtual status reported when no shift exists for the day.
NO_RECORD = "no_record"


class ShiftType(str, Enum):
    FULL = "full"
    OVERTIME = "overtime"
    DAY_OFF = "day_off"
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    PAID = "paid"


class PenaltyKind(str, Enum):
    LATE = "late"
    ABSENCE = "absence"
    MANUAL = "manual"


class LatePenaltyType(str, Enum):
    """How lateness is converted into money."""

    FIXED = "fixed"
    PER_MINUTE = "per_minute"
    PER_5_MINUTES = "per_5_minutes"
    PER_10_MINUTES = "per_10_minutes"


class AttendanceMark(str, Enum):
    """Statuses accepted by bulk attendance saves."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    SICK = "sick"
    VACATION = "vacation"
