from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..common.datetime_utils import minutes_of_day
from ..core.constants import DEFAULT_GRACE_MINUTES
from ..core.exceptions import ShiftConfigurationError, TooEarly, TooLate
from .model import Shift, WorkingHoursConfig


@dataclass(frozen=True)
class Authorized:
    pass


@dataclass(frozen=True)
class TooEarlyDecision:
    minutes: int


@dataclass(frozen=True)
class TooLateDecision:
    minutes: int


WindowDecision = Union[Authorized, TooEarlyDecision, TooLateDecision]


class ShiftWindowPolicy:
    """Authorizes attendance actions inside ``[start - grace, end + grace]``.

    Check-in and check-out share the window built from the shift's scheduled
    bounds; check-out is not re-anchored on the actual check-in time.
    """

    def __init__(self, working_hours: WorkingHoursConfig, *, grace_minutes: int = DEFAULT_GRACE_MINUTES):
        if grace_minutes < 0:
            raise ValueError("grace_minutes must be >= 0")
        self._working_hours = working_hours
        self._grace = int(grace_minutes)

    @property
    def working_hours(self) -> WorkingHoursConfig:
        return self._working_hours

    def scheduled_minutes(self, shift: Shift) -> tuple[int, int]:
        start, end = shift.bounds(self._working_hours)
        start_min, end_min = minutes_of_day(start), minutes_of_day(end)
        if end_min < start_min:
            raise ShiftConfigurationError(
                f"Shift {shift.shift_id} ends at {end:%H:%M} before it starts at {start:%H:%M}"
            )
        return start_min, end_min

    def authorize(self, shift: Shift, now_minutes_of_day: int) -> WindowDecision:
        start_min, end_min = self.scheduled_minutes(shift)
        opens = start_min - self._grace
        closes = end_min + self._grace
        if now_minutes_of_day < opens:
            return TooEarlyDecision(minutes=opens - now_minutes_of_day)
        if now_minutes_of_day > closes:
            return TooLateDecision(minutes=now_minutes_of_day - closes)
        return Authorized()

    def ensure_authorized(self, shift: Shift, now_minutes_of_day: int) -> None:
        decision = self.authorize(shift, now_minutes_of_day)
        if isinstance(decision, TooEarlyDecision):
            raise TooEarly(decision.minutes)
        if isinstance(decision, TooLateDecision):
            raise TooLate(decision.minutes)
