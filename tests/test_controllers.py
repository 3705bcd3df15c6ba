from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from types import SimpleNamespace

import pytest
from flask import Flask

from kindergarten_staff.attendance.aggregator import AttendanceAggregator
from kindergarten_staff.attendance.controller import register as register_attendance
from kindergarten_staff.attendance.service import AttendanceService
from kindergarten_staff.common.cache import TTLCache
from kindergarten_staff.core.enums import ShiftStatus
from kindergarten_staff.core.exceptions import OutcomeUnknownError
from kindergarten_staff.geo.distance import Coordinate
from kindergarten_staff.geo.geofence import GeofenceConfig
from kindergarten_staff.payroll.controller import register as register_payroll
from kindergarten_staff.payroll.model import PayrollBaseline
from kindergarten_staff.payroll.service import PayrollService
from kindergarten_staff.settings.service import SessionSettings
from kindergarten_staff.shifts.model import Shift, WorkingHoursConfig

CENTER = Coordinate(latitude=51.1605, longitude=71.4704)


class InMemoryShifts:
    def __init__(self, shifts):
        self.shifts = {s.shift_id: s for s in shifts}
        self.fail_with = None
        self.devices = []

    def get_for_staff_on_date(self, staff_id, work_date):
        return [s for s in self.shifts.values() if s.staff_id == staff_id and s.work_date == work_date]

    def list_for_staff_in_range(self, staff_id, start, end):
        return [s for s in self.shifts.values() if s.staff_id == staff_id and start <= s.work_date <= end]

    def commit_check_in(self, shift, device=None):
        if self.fail_with is not None:
            raise self.fail_with
        self.devices.append(device)
        self.shifts[shift.shift_id] = shift
        return shift

    commit_check_out = commit_check_in


class InMemorySettings:
    def get_geofence_config(self):
        return GeofenceConfig(enabled=True, center=CENTER, radius_meters=100)

    def get_working_hours_config(self):
        return WorkingHoursConfig.default()


class InMemoryMarks:
    def __init__(self):
        self.rows = []

    def upsert_mark(self, *, scope_id, record):
        self.rows.append((scope_id, record))


class InMemoryPayroll:
    def get_payroll_baseline(self, staff_id, period):
        if (staff_id, period) == ("u1", "2024-03"):
            return PayrollBaseline(staff_id="u1", period="2024-03", accruals=Decimal(100000))
        return None


@pytest.fixture
def shifts():
    return InMemoryShifts(
        [
            Shift(
                shift_id="s1",
                staff_id="u1",
                work_date=date(2024, 3, 4),
                scheduled_start=time(8, 0),
                scheduled_end=time(16, 0),
            ),
            Shift(
                shift_id="s0",
                staff_id="u1",
                work_date=date(2024, 3, 1),
                scheduled_start=time(8, 0),
                scheduled_end=time(16, 0),
                status=ShiftStatus.COMPLETED,
                late_minutes=12,
            ),
        ]
    )


@pytest.fixture
def client(shifts):
    settings = SessionSettings(InMemorySettings(), TTLCache(None))
    attendance = AttendanceService(
        shifts,
        settings,
        InMemoryMarks(),
        location_timeout_seconds=1,
        clock=lambda: datetime(2024, 3, 4, 8, 12),
    )
    aggregator = AttendanceAggregator(shifts)
    container = SimpleNamespace(
        attendance_service=attendance,
        aggregator=aggregator,
        payroll_service=PayrollService(InMemoryPayroll(), aggregator),
    )

    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    register_attendance(app, container)
    register_payroll(app, container)

    c = app.test_client()
    with c.session_transaction() as sess:
        sess["user_id"] = "u1"
    return c


def test_requires_login(client):
    with client.session_transaction() as sess:
        sess.clear()
    resp = client.get("/api/shifts/today")
    assert resp.status_code == 401


def test_today_status(client):
    resp = client.get("/api/shifts/today")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "scheduled"


def test_check_in_inside_fence(client, shifts):
    resp = client.post(
        "/api/shifts/check-in",
        json={"latitude": CENTER.latitude, "longitude": CENTER.longitude, "platform": "web"},
        headers={"User-Agent": "pytest"},
    )
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["shift"]["status"] == "in_progress"
    assert body["shift"]["lateMinutes"] == 12
    assert shifts.devices[0].user_agent == "pytest"
    assert shifts.devices[0].platform == "web"


def test_check_in_outside_fence(client, shifts):
    resp = client.post("/api/shifts/check-in", json={"latitude": 51.1605 + 0.00135, "longitude": 71.4704})
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["code"] == "out_of_geofence"
    assert shifts.shifts["s1"].status == ShiftStatus.SCHEDULED


def test_check_in_without_location(client):
    resp = client.post("/api/shifts/check-in", json={})
    assert resp.status_code == 422
    assert resp.get_json()["code"] == "location_unavailable"


def test_check_out_before_check_in(client):
    resp = client.post("/api/shifts/check-out", json={"latitude": CENTER.latitude, "longitude": CENTER.longitude})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "not_checked_in"


def test_unknown_outcome_asks_to_reverify(client, shifts):
    shifts.fail_with = OutcomeUnknownError()
    resp = client.post("/api/shifts/check-in", json={"latitude": CENTER.latitude, "longitude": CENTER.longitude})

    assert resp.status_code == 503
    assert "re-verify" in resp.get_json()["message"]


def test_bulk_save_partial_failure(client):
    resp = client.post(
        "/api/attendance/bulk",
        json={
            "scopeId": "group-1",
            "records": [
                {"childId": "c1", "date": "2024-03-04", "status": "present"},
                {"childId": "c2", "date": "2024-03-04", "status": "unknown"},
            ],
        },
    )
    body = resp.get_json()

    assert resp.status_code == 207
    assert body["successCount"] == 1
    assert body["errorCount"] == 1


def test_bulk_save_requires_list(client):
    resp = client.post("/api/attendance/bulk", json={"records": "nope"})
    assert resp.status_code == 400


def test_attendance_summary(client):
    resp = client.get("/api/attendance/summary?from=2024-03-01&to=2024-03-31")
    body = resp.get_json()["summary"]
    assert body["lateCount"] == 1
    assert body["period"] == "2024-03"


def test_payroll_record(client):
    resp = client.get("/api/payroll/u1/2024-03")
    record = resp.get_json()["record"]

    assert resp.status_code == 200
    assert record["latePenalties"] == "300.00"
    assert record["total"] == "99700.00"


def test_payroll_record_missing(client):
    resp = client.get("/api/payroll/u1/2024-04")
    assert resp.status_code == 400


def test_payroll_period(client):
    resp = client.get("/api/payroll/2024-03?staffIds=u1,u2")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["success"] is False
    assert [r["staffId"] for r in body["records"]] == ["u1"]
    assert body["errors"][0]["staffId"] == "u2"
