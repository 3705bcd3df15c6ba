from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_of_day
from ..core.enums import NO_RECORD, ShiftStatus
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    InvalidShiftState,
    NotCheckedIn,
    ShiftConfigurationError,
    ShiftNotFound,
)
from ..geo.distance import Coordinate, validate_coordinate
from ..geo.geofence import GeofencePolicy
from ..shifts.model import Shift
from ..shifts.window import ShiftWindowPolicy
from .factory import AttendanceStrategyFactory

logger = logging.getLogger(__name__)

CHECK_IN_FROM = frozenset({ShiftStatus.SCHEDULED, ShiftStatus.LATE, ShiftStatus.PENDING_APPROVAL})


def select_active_shift(shifts: Sequence[Shift], *, staff_id: str, work_date: date) -> Optional[Shift]:
    """Return the single non-cancelled shift of the day, if any."""
    active = [s for s in shifts if s.staff_id == staff_id and s.work_date == work_date and s.status != ShiftStatus.CANCELLED]
    if len(active) > 1:
        raise ShiftConfigurationError(f"Staff {staff_id} has {len(active)} active shifts on {work_date}")
    return active[0] if active else None


class AttendanceStateMachine:
    """Drives a shift through check-in and check-out.

    Transitions are pure: on success a new ``Shift`` is returned, on failure a
    ``ValidationError`` subclass (or ``LocationUnavailable``) is raised and the
    input is left untouched. Checks run in order: shift state, geofence, time
    window.
    """

    def __init__(
        self,
        window: ShiftWindowPolicy,
        geofence: GeofencePolicy,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._window = window
        self._geofence = geofence
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(self, shift: Optional[Shift], now: datetime, location: Optional[Coordinate] = None) -> Shift:
        if shift is None:
            raise ShiftNotFound()
        if shift.status == ShiftStatus.COMPLETED:
            raise AlreadyCheckedOut("This shift is already completed")
        if shift.status == ShiftStatus.IN_PROGRESS or shift.actual_start is not None:
            raise AlreadyCheckedIn("You have already checked in for this shift")
        if shift.status not in CHECK_IN_FROM:
            raise InvalidShiftState(f"Cannot check in to a shift with status {shift.status.value}")

        if location is not None:
            validate_coordinate(location)
        self._geofence.check(location)
        self._window.ensure_authorized(shift, minutes_of_day(now))

        start, _ = shift.bounds(self._window.working_hours)
        scheduled_start = datetime.combine(now.date(), start, tzinfo=now.tzinfo)
        strategy = self._factory.for_checkin(now=now, scheduled_start=scheduled_start)
        decision = strategy.decide_checkin(now=now, scheduled_start=scheduled_start)

        logger.debug("shift %s checked in at %s (late %d min)", shift.shift_id, now, decision.late_minutes)
        return replace(
            shift,
            status=ShiftStatus.IN_PROGRESS,
            actual_start=now,
            late_minutes=decision.late_minutes,
            check_in_location=location,
        )

    def check_out(self, shift: Optional[Shift], now: datetime, location: Optional[Coordinate] = None) -> Shift:
        if shift is None:
            raise ShiftNotFound()
        if shift.status == ShiftStatus.COMPLETED or shift.actual_end is not None:
            raise AlreadyCheckedOut("You have already checked out of this shift")
        if shift.status in CHECK_IN_FROM:
            raise NotCheckedIn("You have not checked in for this shift yet")
        if shift.status != ShiftStatus.IN_PROGRESS:
            raise InvalidShiftState(f"Cannot check out of a shift with status {shift.status.value}")

        if location is not None:
            validate_coordinate(location)
        self._geofence.check(location)
        self._window.ensure_authorized(shift, minutes_of_day(now))

        _, end = shift.bounds(self._window.working_hours)
        scheduled_end = datetime.combine(now.date(), end, tzinfo=now.tzinfo)
        strategy = self._factory.for_checkout(now=now, scheduled_end=scheduled_end)
        decision = strategy.decide_checkout(now=now, scheduled_end=scheduled_end, late_minutes=shift.late_minutes)

        logger.debug(
            "shift %s checked out at %s (overtime %d, early %d)",
            shift.shift_id,
            now,
            decision.overtime_minutes,
            decision.early_leave_minutes,
        )
        return replace(
            shift,
            status=ShiftStatus.COMPLETED,
            actual_end=now,
            overtime_minutes=decision.overtime_minutes,
            early_leave_minutes=decision.early_leave_minutes,
            check_out_location=location,
        )

    @staticmethod
    def status_for(shifts: Sequence[Shift], *, staff_id: str, work_date: date) -> str:
        shift = select_active_shift(shifts, staff_id=staff_id, work_date=work_date)
        if shift is not None:
            return shift.status.value
        cancelled = [s for s in shifts if s.staff_id == staff_id and s.work_date == work_date]
        return cancelled[0].status.value if cancelled else NO_RECORD
