from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_ABSENCE_PENALTY, DEFAULT_LATE_PENALTY_RATE
from ..core.enums import LatePenaltyType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PenaltyPolicy:
    """Business constants for attendance penalties.

    The default charges ``late_penalty_rate`` for every started 5-minute block
    of lateness and ``absence_penalty`` per no-show.
    """

    late_penalty_type: LatePenaltyType = LatePenaltyType.PER_5_MINUTES
    late_penalty_rate: int = DEFAULT_LATE_PENALTY_RATE
    absence_penalty: int = DEFAULT_ABSENCE_PENALTY

    def __post_init__(self):
        if self.late_penalty_rate < 0 or self.absence_penalty < 0:
            raise ValidationError("Penalty amounts must be >= 0")

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "PenaltyPolicy":
        raw = raw or {}
        try:
            late_type = LatePenaltyType(raw.get("late_penalty_type", LatePenaltyType.PER_5_MINUTES.value))
        except ValueError:
            raise ValidationError(f"Unknown late penalty type {raw.get('late_penalty_type')!r}")
        return cls(
            late_penalty_type=late_type,
            late_penalty_rate=int(raw.get("late_penalty_rate", DEFAULT_LATE_PENALTY_RATE)),
            absence_penalty=int(raw.get("absence_penalty", DEFAULT_ABSENCE_PENALTY)),
        )
