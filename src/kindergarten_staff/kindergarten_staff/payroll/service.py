from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..attendance.aggregator import AttendanceAggregator
from ..attendance.model import AttendanceSummary
from ..common.datetime_utils import Period
from ..common.refs import resolve_id
from ..core.exceptions import DomainError, ValidationError
from ..shifts.model import Shift
from .calculator.base import PenaltyCalculator
from .calculator.standard_calculator import StandardPenaltyCalculator
from .model import PayrollBaseline, PayrollRecord, ShiftAuditRow, money
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


def _hhmm(value) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def _iso(value) -> Optional[str]:
    return value.isoformat(timespec="minutes") if value else None


class PayrollReconciler:
    """Merges a payroll baseline with computed penalties.

    Pure: the same baseline and summary always give an equal record with an
    identical ``to_dict()``.
    """

    def __init__(self, calculator: Optional[PenaltyCalculator] = None):
        self._calculator = calculator or StandardPenaltyCalculator()

    def reconcile(self, baseline: PayrollBaseline, summary: AttendanceSummary) -> PayrollRecord:
        if resolve_id(baseline.staff_id) != resolve_id(summary.staff_id):
            raise ValidationError(
                f"Payroll baseline for {baseline.staff_id} cannot use attendance of {summary.staff_id}"
            )
        if summary.period.label != baseline.period:
            raise ValidationError(
                f"Payroll baseline for {baseline.period} cannot use attendance of {summary.period.label}"
            )
        breakdown = self._calculator.calculate(summary, fines=baseline.fines)
        audit = tuple(self._audit_row(s) for s in sorted(summary.shifts, key=lambda s: (s.work_date, s.shift_id)))
        return PayrollRecord(
            staff_id=resolve_id(baseline.staff_id),
            period=baseline.period,
            accruals=baseline.accruals,
            bonuses=baseline.bonuses,
            status=baseline.status,
            breakdown=breakdown,
            audit=audit,
        )

    def _audit_row(self, shift: Shift) -> ShiftAuditRow:
        kind, amount = self._calculator.shift_penalty(shift)
        return ShiftAuditRow(
            shift_id=shift.shift_id,
            work_date=shift.work_date,
            scheduled_start=_hhmm(shift.scheduled_start),
            scheduled_end=_hhmm(shift.scheduled_end),
            actual_start=_iso(shift.actual_start),
            actual_end=_iso(shift.actual_end),
            status=shift.status,
            late_minutes=shift.late_minutes,
            overtime_minutes=shift.overtime_minutes,
            early_leave_minutes=shift.early_leave_minutes,
            penalty_kind=kind,
            penalty_amount=amount,
        )


@dataclass(frozen=True)
class PeriodReconciliation:
    records: list[PayrollRecord]
    errors: list[dict]

    def summary(self) -> list[dict]:
        rows = [
            {
                "staffId": r.staff_id,
                "penalties": str(money(r.penalties)),
                "total": str(money(r.total)),
                "status": r.status.value,
            }
            for r in self.records
        ]
        rows.sort(key=lambda x: x["staffId"])
        return rows


class PayrollService:
    """Recomputes payroll records from the current attendance on every view."""

    def __init__(
        self,
        payroll: PayrollRepository,
        aggregator: AttendanceAggregator,
        *,
        reconciler: Optional[PayrollReconciler] = None,
    ):
        self._payroll = payroll
        self._aggregator = aggregator
        self._reconciler = reconciler or PayrollReconciler()

    def reconcile_for(self, staff_id: Any, period: str) -> PayrollRecord:
        staff = resolve_id(staff_id)
        bounds = Period.for_month(period)
        baseline = self._payroll.get_payroll_baseline(staff, bounds.label)
        if baseline is None:
            raise ValidationError(f"No payroll record for staff {staff} in {bounds.label}")
        summary = self._aggregator.summarize(staff, bounds.start, bounds.end)
        record = self._reconciler.reconcile(baseline, summary)
        logger.info(
            "payroll %s %s reconciled: penalties=%s total=%s",
            staff,
            bounds.label,
            record.penalties,
            record.total,
        )
        return record

    def reconcile_period(self, staff_ids: Iterable[Any], period: str) -> PeriodReconciliation:
        """Reconcile several employees; one failure does not stop the others."""
        records: list[PayrollRecord] = []
        errors: list[dict] = []
        for staff_id in staff_ids:
            try:
                records.append(self.reconcile_for(staff_id, period))
            except DomainError as exc:
                logger.warning("payroll reconciliation failed for %s: %s", staff_id, exc)
                errors.append({"staffId": str(staff_id), "error": str(exc)})
        return PeriodReconciliation(records=records, errors=errors)
