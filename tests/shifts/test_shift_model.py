from datetime import date, datetime, time

from kindergarten_staff.core.enums import ShiftStatus, ShiftType
from kindergarten_staff.geo.distance import Coordinate
from kindergarten_staff.shifts.model import shift_from_document


def test_document_with_embedded_staff_is_normalized():
    shift = shift_from_document(
        {
            "_id": "abc",
            "staffId": {"_id": "u7", "fullName": "Aigerim"},
            "date": "2024-03-04T00:00:00.000Z",
            "startTime": "08:00",
            "endTime": "16:00",
            "type": "full",
            "status": "in_progress",
            "actualStart": "2024-03-04T08:12:00",
            "lateMinutes": 12,
            "checkInLocation": {"latitude": 51.16, "longitude": 71.47},
        }
    )

    assert shift.shift_id == "abc"
    assert shift.staff_id == "u7"
    assert shift.work_date == date(2024, 3, 4)
    assert shift.scheduled_start == time(8, 0)
    assert shift.shift_type == ShiftType.FULL
    assert shift.status == ShiftStatus.IN_PROGRESS
    assert shift.actual_start == datetime(2024, 3, 4, 8, 12)
    assert shift.late_minutes == 12
    assert shift.check_in_location == Coordinate(latitude=51.16, longitude=71.47)


def test_negative_minutes_are_clamped():
    shift = shift_from_document({"id": 1, "staffId": 2, "date": "2024-03-04", "lateMinutes": -5})
    assert shift.late_minutes == 0
    assert shift.staff_id == "2"
    assert shift.status == ShiftStatus.SCHEDULED


def test_to_dict_uses_wire_names():
    shift = shift_from_document({"id": "s1", "staffId": "u1", "date": "2024-03-04", "startTime": "08:00"})
    data = shift.to_dict()
    assert data["id"] == "s1"
    assert data["startTime"] == "08:00"
    assert data["endTime"] is None
    assert data["status"] == "scheduled"
