from datetime import date, time

import pytest

from kindergarten_staff.core.exceptions import ShiftConfigurationError, TooEarly, TooLate
from kindergarten_staff.shifts.model import Shift, WorkingHoursConfig
from kindergarten_staff.shifts.window import (
    Authorized,
    ShiftWindowPolicy,
    TooEarlyDecision,
    TooLateDecision,
)


def _shift(start=time(9, 0), end=time(17, 0)):
    return Shift(shift_id="s1", staff_id="u1", work_date=date(2024, 3, 4), scheduled_start=start, scheduled_end=end)


def _policy(grace=30):
    return ShiftWindowPolicy(WorkingHoursConfig.default(), grace_minutes=grace)


@pytest.mark.parametrize("now", [8 * 60 + 30, 12 * 60, 17 * 60 + 30])
def test_inside_window_is_authorized(now):
    assert _policy().authorize(_shift(), now) == Authorized()


def test_one_minute_before_window_is_too_early():
    assert _policy().authorize(_shift(), 8 * 60 + 29) == TooEarlyDecision(minutes=1)


def test_one_minute_after_window_is_too_late():
    assert _policy().authorize(_shift(), 17 * 60 + 31) == TooLateDecision(minutes=1)


def test_too_early_message_names_minutes():
    with pytest.raises(TooEarly) as exc:
        _policy().ensure_authorized(_shift(), 7 * 60 + 43)
    assert exc.value.minutes == 47
    assert "47 minutes too early" in str(exc.value)


def test_too_late_raises():
    with pytest.raises(TooLate):
        _policy().ensure_authorized(_shift(), 18 * 60)


def test_zero_grace_window_is_exact():
    policy = _policy(grace=0)
    assert policy.authorize(_shift(), 9 * 60) == Authorized()
    assert policy.authorize(_shift(), 9 * 60 - 1) == TooEarlyDecision(minutes=1)


def test_end_before_start_is_configuration_error():
    with pytest.raises(ShiftConfigurationError):
        _policy().authorize(_shift(start=time(17, 0), end=time(9, 0)), 12 * 60)


def test_missing_times_fall_back_to_working_hours():
    policy = ShiftWindowPolicy(WorkingHoursConfig.from_strings("10:00", "18:00"))
    shift = _shift(start=None, end=None)

    assert policy.authorize(shift, 9 * 60 + 29) == TooEarlyDecision(minutes=1)
    assert policy.authorize(shift, 18 * 60 + 30) == Authorized()
