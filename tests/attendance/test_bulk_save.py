from __future__ import annotations

from datetime import date

import pytest

from kindergarten_staff.attendance.service import AttendanceService
from kindergarten_staff.common.cache import TTLCache
from kindergarten_staff.core.enums import AttendanceMark
from kindergarten_staff.core.exceptions import PartialBatchFailure, RemoteError
from kindergarten_staff.geo.geofence import GeofenceConfig
from kindergarten_staff.settings.service import SessionSettings
from kindergarten_staff.shifts.model import WorkingHoursConfig


class InMemorySettings:
    def get_geofence_config(self):
        return GeofenceConfig.disabled()

    def get_working_hours_config(self):
        return WorkingHoursConfig.default()


class InMemoryMarks:
    def __init__(self, fail_for=()):
        self.rows = {}
        self.fail_for = set(fail_for)

    def upsert_mark(self, *, scope_id, record):
        if record.subject_id in self.fail_for:
            raise RemoteError("Duplicate entry")
        self.rows[(scope_id, record.subject_id, record.work_date)] = record


def _service(marks):
    return AttendanceService(None, SessionSettings(InMemorySettings(), TTLCache(None)), marks)


def _records():
    return [
        {"childId": "c1", "date": "2024-03-04", "status": "present"},
        {"childId": "c2", "date": "2024-03-04", "status": "absent"},
        {"childId": "c3", "date": "2024-03-04", "status": "holiday"},
        {"childId": {"_id": "c4", "name": "Dana"}, "date": "2024-03-04", "status": "late", "notes": "bus"},
        {"childId": "c5", "date": "2024-03-04", "status": "sick"},
    ]


def test_one_invalid_record_does_not_block_the_others():
    marks = InMemoryMarks()
    result = _service(marks).bulk_save(_records(), "group-1")

    assert result.success_count == 4
    assert result.error_count == 1
    assert result.errors[0].index == 2
    assert result.errors[0].subject_id == "c3"
    assert "Invalid status" in result.errors[0].message
    assert len(marks.rows) == 4
    assert marks.rows[("group-1", "c4", date(2024, 3, 4))].notes == "bus"


def test_remote_failure_is_reported_per_record():
    result = _service(InMemoryMarks(fail_for={"c2"})).bulk_save(_records(), "group-1")

    assert result.success_count == 3
    assert {e.subject_id for e in result.errors} == {"c2", "c3"}
    assert result.to_dict()["errorCount"] == 2


def test_bad_records_are_reported():
    result = _service(InMemoryMarks()).bulk_save(
        [{"date": "2024-03-04", "status": "present"}, {"childId": "c1", "date": "04.03.2024", "status": "present"}, 7],
        "group-1",
    )
    assert result.success_count == 0
    assert [e.index for e in result.errors] == [0, 1, 2]


def test_strict_mode_raises_after_saving():
    marks = InMemoryMarks()
    with pytest.raises(PartialBatchFailure) as exc:
        _service(marks).bulk_save(_records(), "group-1", strict=True)

    assert exc.value.result.success_count == 4
    assert len(marks.rows) == 4


def test_mark_many_applies_one_status():
    marks = InMemoryMarks()
    result = _service(marks).mark_many(
        ["c1", "c2", "c3"], work_date=date(2024, 3, 4), status=AttendanceMark.VACATION, scope_id="group-1"
    )

    assert result.success_count == 3
    assert all(r.status == AttendanceMark.VACATION for r in marks.rows.values())
