from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import RemoteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from ..geo.distance import Coordinate
from .model import Shift
from .repository import DeviceMetadata

_COLUMNS = """
    shift_id, staff_id, work_date, start_time, end_time, shift_type, status,
    actual_start, actual_end, late_minutes, overtime_minutes, early_leave_minutes,
    check_in_lat, check_in_lon, check_out_lat, check_out_lon, notes
"""

_CHECK_IN_FROM = (ShiftStatus.SCHEDULED, ShiftStatus.LATE, ShiftStatus.PENDING_APPROVAL)


def _coordinate(lat: Any, lon: Any) -> Optional[Coordinate]:
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=float(lat), longitude=float(lon))


def _row_to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=str(r["shift_id"]),
        staff_id=str(r["staff_id"]),
        work_date=r["work_date"],
        scheduled_start=normalize_mysql_time(r.get("start_time")),
        scheduled_end=normalize_mysql_time(r.get("end_time")),
        shift_type=ShiftType(r.get("shift_type") or ShiftType.FULL.value),
        status=ShiftStatus(r["status"]),
        actual_start=r.get("actual_start"),
        actual_end=r.get("actual_end"),
        late_minutes=int(r.get("late_minutes") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        early_leave_minutes=int(r.get("early_leave_minutes") or 0),
        check_in_location=_coordinate(r.get("check_in_lat"), r.get("check_in_lon")),
        check_out_location=_coordinate(r.get("check_out_lat"), r.get("check_out_lon")),
        notes=r.get("notes"),
    )


def _device_json(device: Optional[DeviceMetadata]) -> Optional[str]:
    return json.dumps(device.to_dict(), sort_keys=True) if device else None


class MySQLShiftRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_staff_on_date(self, staff_id: str, work_date: date) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM staff_shifts WHERE staff_id=%s AND work_date=%s ORDER BY shift_id",
                (staff_id, work_date),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def list_for_staff_in_range(self, staff_id: str, start: date, end: date) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM staff_shifts
                WHERE staff_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date, shift_id
                """,
                (staff_id, start, end),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def _reload(self, cur, shift_id: str) -> Shift:
        cur.execute(f"SELECT {_COLUMNS} FROM staff_shifts WHERE shift_id=%s", (shift_id,))
        row = fetchone(cur)
        if not row:
            raise RemoteError(f"Shift {shift_id} no longer exists")
        return _row_to_shift(row)

    def commit_check_in(self, shift: Shift, device: Optional[DeviceMetadata] = None) -> Shift:
        loc = shift.check_in_location
        placeholders = ", ".join(["%s"] * len(_CHECK_IN_FROM))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE staff_shifts
                SET status=%s, actual_start=%s, late_minutes=%s,
                    check_in_lat=%s, check_in_lon=%s, check_in_device=%s
                WHERE shift_id=%s AND actual_start IS NULL AND status IN ({placeholders})
                """,
                (
                    shift.status.value,
                    shift.actual_start,
                    shift.late_minutes,
                    loc.latitude if loc else None,
                    loc.longitude if loc else None,
                    _device_json(device),
                    shift.shift_id,
                    *(s.value for s in _CHECK_IN_FROM),
                ),
            )
            if cur.rowcount != 1:
                raise RemoteError("The shift was changed by someone else, refresh and try again")
            return self._reload(cur, shift.shift_id)

    def commit_check_out(self, shift: Shift, device: Optional[DeviceMetadata] = None) -> Shift:
        loc = shift.check_out_location
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_shifts
                SET status=%s, actual_end=%s, overtime_minutes=%s, early_leave_minutes=%s,
                    check_out_lat=%s, check_out_lon=%s, check_out_device=%s
                WHERE shift_id=%s AND actual_end IS NULL AND status=%s
                """,
                (
                    shift.status.value,
                    shift.actual_end,
                    shift.overtime_minutes,
                    shift.early_leave_minutes,
                    loc.latitude if loc else None,
                    loc.longitude if loc else None,
                    _device_json(device),
                    shift.shift_id,
                    ShiftStatus.IN_PROGRESS.value,
                ),
            )
            if cur.rowcount != 1:
                raise RemoteError("The shift was changed by someone else, refresh and try again")
            return self._reload(cur, shift.shift_id)
