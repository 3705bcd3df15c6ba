from datetime import date, time

import pytest

from kindergarten_staff.attendance.aggregator import AttendanceAggregator
from kindergarten_staff.attendance.model import AttendanceSummary
from kindergarten_staff.common.datetime_utils import Period
from kindergarten_staff.core.exceptions import ValidationError
from kindergarten_staff.payroll.calculator.standard_calculator import StandardPenaltyCalculator
from kindergarten_staff.core.enums import ShiftStatus
from kindergarten_staff.shifts.model import Shift, shift_from_document


class InMemoryShifts:
    def __init__(self, shifts):
        self.shifts = shifts

    def list_for_staff_in_range(self, staff_id, start, end):
        # returns more than asked for; the aggregator must filter
        return list(self.shifts)


def _shift(shift_id, day, status, late=0, overtime=0, early=0, staff="u1"):
    return Shift(
        shift_id=shift_id,
        staff_id=staff,
        work_date=date(2024, 3, day),
        scheduled_start=time(8, 0),
        scheduled_end=time(16, 0),
        status=status,
        late_minutes=late,
        overtime_minutes=overtime,
        early_leave_minutes=early,
    )


def test_summary_counts():
    shifts = [
        _shift("a", 4, ShiftStatus.COMPLETED, late=12),
        _shift("b", 5, ShiftStatus.COMPLETED, overtime=30),
        _shift("c", 6, ShiftStatus.NO_SHOW),
        _shift("d", 7, ShiftStatus.IN_PROGRESS, late=3),
        _shift("e", 8, ShiftStatus.CANCELLED, late=50),
        _shift("f", 11, ShiftStatus.COMPLETED, early=20),
        _shift("g", 12, ShiftStatus.SCHEDULED),
        _shift("x", 4, ShiftStatus.COMPLETED, late=99, staff="u2"),
    ]
    summary = AttendanceAggregator(InMemoryShifts(shifts)).summarize("u1", date(2024, 3, 1), date(2024, 3, 31))

    assert summary.present_count == 4
    assert summary.late_count == 2
    assert summary.no_show_count == 1
    assert summary.total_late_minutes == 15
    assert summary.total_overtime_minutes == 30
    assert summary.total_early_leave_minutes == 20
    assert summary.late_minutes_by_shift == (12, 3)
    assert [s.shift_id for s in summary.shifts] == ["a", "b", "c", "d", "f", "g"]


def test_shifts_outside_period_are_ignored():
    shifts = [_shift("a", 4, ShiftStatus.COMPLETED, late=5), _shift("b", 20, ShiftStatus.NO_SHOW)]
    summary = AttendanceAggregator(InMemoryShifts(shifts)).summarize("u1", date(2024, 3, 1), date(2024, 3, 10))

    assert summary.no_show_count == 0
    assert summary.late_count == 1


def test_embedded_staff_reference_is_counted():
    embedded = shift_from_document(
        {
            "id": "a",
            "staffId": {"_id": "u1", "fullName": "Aigerim"},
            "date": "2024-03-04",
            "status": "completed",
            "lateMinutes": 7,
        }
    )
    summary = AttendanceAggregator(InMemoryShifts([embedded])).summarize(
        {"_id": "u1"}, date(2024, 3, 1), date(2024, 3, 31)
    )

    assert summary.staff_id == "u1"
    assert summary.late_count == 1
    assert summary.total_late_minutes == 7


def test_empty_period():
    summary = AttendanceAggregator(InMemoryShifts([])).summarize("u1", date(2024, 3, 1), date(2024, 3, 31))
    assert summary.present_count == 0
    assert summary.to_dict()["period"] == "2024-03"


def test_cancelled_shift_late_minutes_never_count():
    shifts = [
        _shift("a", 4, ShiftStatus.CANCELLED, late=20),
        _shift("b", 5, ShiftStatus.NO_SHOW, late=7),
    ]
    summary = AttendanceAggregator(InMemoryShifts(shifts)).summarize("u1", date(2024, 3, 1), date(2024, 3, 31))

    assert summary.late_count == 1
    assert summary.total_late_minutes == 7
    assert summary.late_minutes_by_shift == (7,)
    assert [s.shift_id for s in summary.shifts] == ["b"]


def test_summary_totals_must_match_late_shifts():
    march = Period.for_month("2024-03")

    with pytest.raises(ValidationError):
        AttendanceSummary(staff_id="u1", period=march, late_count=1, total_late_minutes=12)
    with pytest.raises(ValidationError):
        AttendanceSummary(
            staff_id="u1", period=march, late_count=1, total_late_minutes=12, late_minutes_by_shift=(10,)
        )
    with pytest.raises(ValidationError):
        AttendanceSummary(
            staff_id="u1", period=march, late_count=1, total_late_minutes=0, late_minutes_by_shift=(0,)
        )

    summary = AttendanceSummary(
        staff_id="u1", period=march, late_count=1, total_late_minutes=12, late_minutes_by_shift=(12,)
    )
    breakdown = StandardPenaltyCalculator().calculate(summary)
    assert breakdown.late_penalty == 300
