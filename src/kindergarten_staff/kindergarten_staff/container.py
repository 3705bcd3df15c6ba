from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.aggregator import AttendanceAggregator
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceMarkRepository
from .attendance.service import AttendanceService
from .common.cache import TTLCache
from .core.constants import (
    DEFAULT_GRACE_MINUTES,
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
    DEFAULT_SHIFT_CACHE_TTL_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.standard_calculator import StandardPenaltyCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.policy import PenaltyPolicy
from .payroll.service import PayrollReconciler, PayrollService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SessionSettings
from .shifts.cached_repository import CachingShiftRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    shifts_repo: ShiftRepository
    settings_repo: MySQLSettingsRepository
    marks_repo: MySQLAttendanceMarkRepository
    payroll_repo: MySQLPayrollRepository

    shift_cache: Optional[TTLCache]
    session_settings: SessionSettings

    attendance_service: AttendanceService
    aggregator: AttendanceAggregator
    payroll_service: PayrollService


def build_container(*, db_config: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None) -> Container:
    """Wire repositories and services. ``options`` carries the non-DB settings."""
    options = options or {}
    conn = DatabaseConnection(DBConfig.from_mapping(dict(db_config)))

    shift_cache: Optional[TTLCache] = None
    shifts_repo: ShiftRepository = MySQLShiftRepository(conn)
    ttl = float(options.get("SHIFT_CACHE_TTL_SECONDS", DEFAULT_SHIFT_CACHE_TTL_SECONDS))
    if ttl > 0:
        shift_cache = TTLCache(ttl)
        shifts_repo = CachingShiftRepository(shifts_repo, shift_cache)

    settings_repo = MySQLSettingsRepository(conn)
    marks_repo = MySQLAttendanceMarkRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    session_settings = SessionSettings(
        settings_repo,
        TTLCache(None),
        fail_closed=bool(options.get("GEOFENCE_FAIL_CLOSED", False)),
    )

    attendance_service = AttendanceService(
        shifts_repo,
        session_settings,
        marks_repo,
        strategy_factory=AttendanceStrategyFactory(),
        grace_minutes=int(options.get("GRACE_MINUTES", DEFAULT_GRACE_MINUTES)),
        location_timeout_seconds=float(options.get("LOCATION_TIMEOUT_SECONDS", DEFAULT_LOCATION_TIMEOUT_SECONDS)),
    )
    aggregator = AttendanceAggregator(shifts_repo)
    calculator = StandardPenaltyCalculator(PenaltyPolicy.from_mapping(options.get("PENALTY_POLICY")))
    payroll_service = PayrollService(
        payroll_repo,
        aggregator,
        reconciler=PayrollReconciler(calculator),
    )

    return Container(
        conn=conn,
        shifts_repo=shifts_repo,
        settings_repo=settings_repo,
        marks_repo=marks_repo,
        payroll_repo=payroll_repo,
        shift_cache=shift_cache,
        session_settings=session_settings,
        attendance_service=attendance_service,
        aggregator=aggregator,
        payroll_service=payroll_service,
    )
