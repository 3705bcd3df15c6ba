from __future__ import annotations

from typing import Protocol

from .model import BulkAttendanceRecord


class AttendanceMarkRepository(Protocol):
    def upsert_mark(self, *, scope_id: str, record: BulkAttendanceRecord) -> None:
        """Create or update one mark in its own transaction.

        Raises ``RemoteError`` on failure.
        """

        raise NotImplementedError
