from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.refs import resolve_id
from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.enums import AttendanceMark
from ..core.exceptions import (
    LocationUnavailable,
    OutcomeUnknownError,
    PartialBatchFailure,
    RemoteError,
    ShiftNotFound,
    ValidationError,
)
from ..geo.distance import Coordinate
from ..geo.geofence import GeofencePolicy
from ..geo.location import LocationProvider, acquire_location
from ..settings.service import SessionSettings
from ..shifts.model import Shift
from ..shifts.repository import DeviceMetadata, ShiftRepository
from ..shifts.window import ShiftWindowPolicy
from .factory import AttendanceStrategyFactory
from .model import BulkAttendanceRecord, BulkSaveError, BulkSaveResult
from .repository import AttendanceMarkRepository
from .state_machine import AttendanceStateMachine, select_active_shift

logger = logging.getLogger(__name__)

_SUBJECT_KEYS = ("subjectId", "staffId", "childId", "userId")


class AttendanceService:
    """Check-in/check-out orchestration and bulk attendance saves.

    Commits are never retried: an ambiguous commit surfaces as
    ``OutcomeUnknownError`` and the caller must re-read the shift.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        settings: SessionSettings,
        marks: Optional[AttendanceMarkRepository] = None,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
        location_timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._shifts = shifts
        self._settings = settings
        self._marks = marks
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)
        self._location_timeout = float(location_timeout_seconds)
        self._clock = clock

    def state_machine(self) -> AttendanceStateMachine:
        window = ShiftWindowPolicy(self._settings.working_hours(), grace_minutes=self._grace_minutes)
        geofence = GeofencePolicy(self._settings.geofence())
        return AttendanceStateMachine(window, geofence, strategy_factory=self._factory)

    def _today_shift(self, staff_id: str, today: date) -> Shift:
        shifts = self._shifts.get_for_staff_on_date(staff_id, today)
        shift = select_active_shift(shifts, staff_id=staff_id, work_date=today)
        if shift is None:
            raise ShiftNotFound(staff_id, today)
        return shift

    def _locate(self, provider: Optional[LocationProvider]) -> Optional[Coordinate]:
        if self._settings.geofence().enabled:
            return acquire_location(provider, timeout_seconds=self._location_timeout)
        if provider is None:
            return None
        try:
            return acquire_location(provider, timeout_seconds=self._location_timeout)
        except LocationUnavailable as exc:
            # geofencing is off, the reading is informational only
            logger.info("location not recorded: %s", exc)
            return None

    def _commit(self, commit, shift: Shift, device: Optional[DeviceMetadata], action: str) -> Shift:
        try:
            committed = commit(shift, device)
        except OutcomeUnknownError:
            logger.error("%s for shift %s has an unknown outcome; not retrying", action, shift.shift_id)
            raise
        except RemoteError as exc:
            logger.warning("%s for shift %s failed: %s", action, shift.shift_id, exc)
            raise
        logger.info("%s committed for shift %s (staff %s)", action, committed.shift_id, committed.staff_id)
        return committed

    def check_in(
        self,
        staff_id: Any,
        *,
        now: Optional[datetime] = None,
        location_provider: Optional[LocationProvider] = None,
        device: Optional[DeviceMetadata] = None,
    ) -> Shift:
        staff_id = resolve_id(staff_id)
        now = now or self._clock()
        shift = self._today_shift(staff_id, now.date())
        machine = self.state_machine()
        location = self._locate(location_provider)
        try:
            updated = machine.check_in(shift, now, location)
        except ValidationError as exc:
            logger.info("check-in rejected for staff %s (%s): %s", staff_id, exc.code, exc)
            raise
        return self._commit(self._shifts.commit_check_in, updated, device, "check-in")

    def check_out(
        self,
        staff_id: Any,
        *,
        now: Optional[datetime] = None,
        location_provider: Optional[LocationProvider] = None,
        device: Optional[DeviceMetadata] = None,
    ) -> Shift:
        staff_id = resolve_id(staff_id)
        now = now or self._clock()
        shift = self._today_shift(staff_id, now.date())
        machine = self.state_machine()
        location = self._locate(location_provider)
        try:
            updated = machine.check_out(shift, now, location)
        except ValidationError as exc:
            logger.info("check-out rejected for staff %s (%s): %s", staff_id, exc.code, exc)
            raise
        return self._commit(self._shifts.commit_check_out, updated, device, "check-out")

    def today_status(self, staff_id: Any, today: Optional[date] = None) -> str:
        """Status of today's shift, or ``no_record`` when none is scheduled."""
        staff_id = resolve_id(staff_id)
        today = today or self._clock().date()
        shifts = self._shifts.get_for_staff_on_date(staff_id, today)
        return AttendanceStateMachine.status_for(shifts, staff_id=staff_id, work_date=today)

    @staticmethod
    def _parse_record(raw: Union[BulkAttendanceRecord, Mapping[str, Any]]) -> BulkAttendanceRecord:
        if isinstance(raw, BulkAttendanceRecord):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError("Record must be an object")

        subject = next((raw[k] for k in _SUBJECT_KEYS if raw.get(k) is not None), None)
        if subject is None:
            raise ValidationError("Record has no subject id")
        work_date = raw.get("date")
        if not isinstance(work_date, date):
            work_date = parse_iso_date(work_date)
        try:
            status = AttendanceMark(raw.get("status"))
        except ValueError:
            raise ValidationError(f"Invalid status {raw.get('status')!r}")
        notes = str(raw.get("notes") or "").strip() or None
        return BulkAttendanceRecord(subject_id=resolve_id(subject), work_date=work_date, status=status, notes=notes)

    @staticmethod
    def _subject_hint(raw: Any) -> Optional[str]:
        if isinstance(raw, BulkAttendanceRecord):
            return raw.subject_id
        if isinstance(raw, Mapping):
            for key in _SUBJECT_KEYS:
                if raw.get(key) is not None:
                    try:
                        return resolve_id(raw[key])
                    except ValidationError:
                        return None
        return None

    def bulk_save(self, records: Iterable[Any], scope_id: Any, *, strict: bool = False) -> BulkSaveResult:
        """Save each record in its own transaction and report per-record errors.

        Saved records stay saved when other records fail. With ``strict`` a
        partial failure is raised as ``PartialBatchFailure`` after the batch.
        """
        if self._marks is None:
            raise RuntimeError("AttendanceService was built without a mark repository")
        scope = resolve_id(scope_id)

        saved: list[BulkAttendanceRecord] = []
        errors: list[BulkSaveError] = []
        for index, raw in enumerate(records):
            try:
                record = self._parse_record(raw)
                self._marks.upsert_mark(scope_id=scope, record=record)
            except (ValidationError, RemoteError) as exc:
                errors.append(BulkSaveError(index=index, subject_id=self._subject_hint(raw), message=str(exc)))
                continue
            saved.append(record)

        if errors:
            logger.warning("bulk save for %s: %d saved, %d failed", scope, len(saved), len(errors))
        else:
            logger.info("bulk save for %s: %d saved", scope, len(saved))
        result = BulkSaveResult(
            success_count=len(saved),
            error_count=len(errors),
            errors=tuple(errors),
            records=tuple(saved),
        )
        if strict and result.has_failures:
            raise PartialBatchFailure(result)
        return result

    def mark_many(
        self,
        subject_ids: Iterable[Any],
        *,
        work_date: date,
        status: Union[AttendanceMark, str],
        scope_id: Any,
        notes: Optional[str] = None,
        strict: bool = False,
    ) -> BulkSaveResult:
        """Apply one status to many subjects for a single date."""
        status_value = status.value if isinstance(status, AttendanceMark) else status
        rows = [
            {"subjectId": sid, "date": work_date, "status": status_value, "notes": notes}
            for sid in subject_ids
        ]
        return self.bulk_save(rows, scope_id, strict=strict)
