from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import BulkAttendanceRecord


class MySQLAttendanceMarkRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_mark(self, *, scope_id: str, record: BulkAttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_marks (scope_id, subject_id, work_date, status, notes)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), notes=VALUES(notes)
                """,
                (scope_id, record.subject_id, record.work_date, record.status.value, record.notes),
            )
