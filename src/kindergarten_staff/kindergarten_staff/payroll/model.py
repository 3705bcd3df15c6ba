from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus, PenaltyKind, ShiftStatus

_CENTS = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(_CENTS)


@dataclass(frozen=True)
class Fine:
    """A manual deduction added to a payroll record by an administrator."""

    amount: Decimal
    reason: str
    fine_date: Optional[date] = None


@dataclass(frozen=True)
class PenaltyLineItem:
    kind: PenaltyKind
    amount: Decimal
    count: int

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "amount": str(money(self.amount)), "count": self.count}


@dataclass(frozen=True)
class PenaltyBreakdown:
    items: tuple[PenaltyLineItem, ...]

    def amount_for(self, kind: PenaltyKind) -> Decimal:
        return sum((i.amount for i in self.items if i.kind == kind), Decimal(0))

    @property
    def late_penalty(self) -> Decimal:
        return self.amount_for(PenaltyKind.LATE)

    @property
    def absence_penalty(self) -> Decimal:
        return self.amount_for(PenaltyKind.ABSENCE)

    @property
    def manual_penalty(self) -> Decimal:
        return self.amount_for(PenaltyKind.MANUAL)

    @property
    def total_penalty(self) -> Decimal:
        return sum((i.amount for i in self.items), Decimal(0))


@dataclass(frozen=True)
class PayrollBaseline:
    staff_id: str
    period: str
    accruals: Decimal
    bonuses: Decimal = Decimal(0)
    status: PayrollStatus = PayrollStatus.DRAFT
    fines: tuple[Fine, ...] = ()


@dataclass(frozen=True)
class ShiftAuditRow:
    """Scheduled vs. actual times of one shift and the penalty it caused."""

    shift_id: str
    work_date: date
    scheduled_start: Optional[str]
    scheduled_end: Optional[str]
    actual_start: Optional[str]
    actual_end: Optional[str]
    status: ShiftStatus
    late_minutes: int
    overtime_minutes: int
    early_leave_minutes: int
    penalty_kind: Optional[PenaltyKind]
    penalty_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "shiftId": self.shift_id,
            "date": self.work_date.isoformat(),
            "scheduledStart": self.scheduled_start,
            "scheduledEnd": self.scheduled_end,
            "actualStart": self.actual_start,
            "actualEnd": self.actual_end,
            "status": self.status.value,
            "lateMinutes": self.late_minutes,
            "overtimeMinutes": self.overtime_minutes,
            "earlyLeaveMinutes": self.early_leave_minutes,
            "penaltyKind": self.penalty_kind.value if self.penalty_kind else None,
            "penaltyAmount": str(money(self.penalty_amount)),
        }


@dataclass(frozen=True)
class PayrollRecord:
    """Reconciled payroll line. ``penalties`` and ``total`` are always derived."""

    staff_id: str
    period: str
    accruals: Decimal
    bonuses: Decimal
    status: PayrollStatus
    breakdown: PenaltyBreakdown
    audit: tuple[ShiftAuditRow, ...] = ()

    @property
    def penalties(self) -> Decimal:
        return self.breakdown.total_penalty

    @property
    def total(self) -> Decimal:
        return self.accruals + self.bonuses - self.penalties

    def to_dict(self) -> dict:
        return {
            "staffId": self.staff_id,
            "period": self.period,
            "accruals": str(money(self.accruals)),
            "bonuses": str(money(self.bonuses)),
            "penalties": str(money(self.penalties)),
            "latePenalties": str(money(self.breakdown.late_penalty)),
            "absencePenalties": str(money(self.breakdown.absence_penalty)),
            "userFines": str(money(self.breakdown.manual_penalty)),
            "total": str(money(self.total)),
            "status": self.status.value,
            "breakdown": [i.to_dict() for i in self.breakdown.items],
            "audit": [r.to_dict() for r in self.audit],
        }
