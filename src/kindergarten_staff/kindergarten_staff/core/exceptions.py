from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when an attendance action or input violates a local rule.

    Resolved without a network call. ``code`` is stable and machine readable,
    the message tells the user which policy failed.
    """

    code = "validation_error"


class InvalidCoordinate(ValidationError):
    code = "invalid_coordinate"


class ShiftNotFound(ValidationError):
    code = "shift_not_found"

    def __init__(self, staff_id: Optional[str] = None, work_date=None):
        if staff_id is None:
            super().__init__("No shift scheduled for today")
        else:
            super().__init__(f"No shift scheduled for staff {staff_id} on {work_date}")
        self.staff_id = staff_id
        self.work_date = work_date


class OutOfGeofence(ValidationError):
    code = "out_of_geofence"

    def __init__(self, distance_meters: float, radius_meters: float):
        super().__init__(
            f"Outside the permitted area: {distance_meters:.0f} m from the site, limit is {radius_meters:.0f} m"
        )
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters


class TooEarly(ValidationError):
    code = "too_early"

    def __init__(self, minutes: int):
        super().__init__(f"{minutes} minutes too early for this shift")
        self.minutes = minutes


class TooLate(ValidationError):
    code = "too_late"

    def __init__(self, minutes: int):
        super().__init__(f"{minutes} minutes too late for this shift")
        self.minutes = minutes


class InvalidShiftState(ValidationError):
    """The shift status does not allow the requested transition."""

    code = "invalid_shift_state"


class AlreadyCheckedIn(InvalidShiftState):
    code = "already_checked_in"


class AlreadyCheckedOut(InvalidShiftState):
    code = "already_checked_out"


class NotCheckedIn(InvalidShiftState):
    code = "not_checked_in"


class ShiftConfigurationError(DomainError):
    """Shift bounds are inconsistent (e.g. end precedes start)."""

    code = "shift_configuration_error"


class LocationUnavailable(DomainError):
    """No location reading could be obtained while geofencing is enabled."""

    code = "location_unavailable"


class RemoteError(DomainError):
    """A collaborator call failed. Shift state must not be assumed changed."""

    code = "remote_error"
    default_message = "The server could not process the request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class OutcomeUnknownError(RemoteError):
    """The commit may or may not have been applied; re-verify before retrying."""

    code = "outcome_unknown"
    default_message = "The result of the operation is unknown, refresh and re-verify before trying again"


class PartialBatchFailure(DomainError):
    """Raised on request when a bulk operation left some records unsaved."""

    code = "partial_batch_failure"

    def __init__(self, result):
        super().__init__(f"{result.error_count} of {result.error_count + result.success_count} records failed")
        self.result = result
