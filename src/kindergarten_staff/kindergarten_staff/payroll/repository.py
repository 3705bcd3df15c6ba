from __future__ import annotations

from typing import Optional, Protocol

from .model import PayrollBaseline


class PayrollRepository(Protocol):
    def get_payroll_baseline(self, staff_id: str, period: str) -> Optional[PayrollBaseline]:
        """Accruals, bonuses, status and manual fines of one payroll record."""

        raise NotImplementedError
