from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Fine, PayrollBaseline


class MySQLPayrollRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_payroll_baseline(self, staff_id: str, period: str) -> Optional[PayrollBaseline]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payroll_id, staff_id, period, accruals, bonuses, status
                FROM payroll_records
                WHERE staff_id=%s AND period=%s
                """,
                (staff_id, period),
            )
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                """
                SELECT amount, reason, fine_date
                FROM payroll_fines
                WHERE payroll_id=%s
                ORDER BY fine_id
                """,
                (r["payroll_id"],),
            )
            fines = tuple(
                Fine(amount=Decimal(f["amount"]), reason=f["reason"], fine_date=f.get("fine_date"))
                for f in fetchall(cur)
            )

        return PayrollBaseline(
            staff_id=str(r["staff_id"]),
            period=r["period"],
            accruals=Decimal(r["accruals"] or 0),
            bonuses=Decimal(r["bonuses"] or 0),
            status=PayrollStatus(r["status"]),
            fines=fines,
        )
