from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Optional

from ...attendance.model import AttendanceSummary
from ...core.enums import PenaltyKind, ShiftStatus
from ...shifts.model import Shift
from ..model import Fine, PenaltyBreakdown, PenaltyLineItem


class PenaltyCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll penalties).

    Subclasses price a single late arrival and a number of absences; the
    breakdown and per-shift attribution are shared.
    """

    @abstractmethod
    def late_penalty(self, late_minutes: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def absence_penalty(self, no_show_count: int) -> int:
        raise NotImplementedError

    def calculate(self, summary: AttendanceSummary, fines: Iterable[Fine] = ()) -> PenaltyBreakdown:
        late_amount = sum(self.late_penalty(m) for m in summary.late_minutes_by_shift)
        items = [
            PenaltyLineItem(kind=PenaltyKind.LATE, amount=Decimal(late_amount), count=summary.late_count),
            PenaltyLineItem(
                kind=PenaltyKind.ABSENCE,
                amount=Decimal(self.absence_penalty(summary.no_show_count)),
                count=summary.no_show_count,
            ),
        ]
        fines = tuple(fines)
        if fines:
            items.append(
                PenaltyLineItem(
                    kind=PenaltyKind.MANUAL,
                    amount=sum((Decimal(f.amount) for f in fines), Decimal(0)),
                    count=len(fines),
                )
            )
        return PenaltyBreakdown(items=tuple(items))

    def shift_penalty(self, shift: Shift) -> tuple[Optional[PenaltyKind], Decimal]:
        """Penalty attributed to one shift, for the audit view.

        Per-shift amounts add up to the late and absence line items of
        ``calculate`` for the same shifts.
        """
        late = Decimal(self.late_penalty(shift.late_minutes)) if shift.late_minutes > 0 else Decimal(0)
        if shift.status == ShiftStatus.NO_SHOW:
            return PenaltyKind.ABSENCE, Decimal(self.absence_penalty(1)) + late
        if late:
            return PenaltyKind.LATE, late
        return None, Decimal(0)
