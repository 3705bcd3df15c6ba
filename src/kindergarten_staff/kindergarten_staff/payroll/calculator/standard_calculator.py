from __future__ import annotations

import math
from typing import Optional

from ...core.enums import LatePenaltyType
from ...core.exceptions import ValidationError
from ..policy import PenaltyPolicy
from .base import PenaltyCalculator

_BLOCK_MINUTES = {
    LatePenaltyType.PER_MINUTE: 1,
    LatePenaltyType.PER_5_MINUTES: 5,
    LatePenaltyType.PER_10_MINUTES: 10,
}


class StandardPenaltyCalculator(PenaltyCalculator):
    """Standard rule: every started block of lateness costs the policy rate."""

    def __init__(self, policy: Optional[PenaltyPolicy] = None):
        self._policy = policy or PenaltyPolicy()

    @property
    def policy(self) -> PenaltyPolicy:
        return self._policy

    def late_penalty(self, late_minutes: int) -> int:
        if late_minutes < 0:
            raise ValidationError("late_minutes must be >= 0")
        if late_minutes == 0:
            return 0
        if self._policy.late_penalty_type == LatePenaltyType.FIXED:
            return self._policy.late_penalty_rate
        block = _BLOCK_MINUTES[self._policy.late_penalty_type]
        return math.ceil(late_minutes / block) * self._policy.late_penalty_rate

    def absence_penalty(self, no_show_count: int) -> int:
        if no_show_count < 0:
            raise ValidationError("no_show_count must be >= 0")
        return no_show_count * self._policy.absence_penalty
