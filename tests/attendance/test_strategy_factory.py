from datetime import datetime

from kindergarten_staff.attendance.factory import AttendanceStrategyFactory
from kindergarten_staff.attendance.strategies.early_strategy import EarlyLeaveStrategy
from kindergarten_staff.attendance.strategies.late_strategy import LateStrategy
from kindergarten_staff.attendance.strategies.normal_strategy import NormalStrategy
from kindergarten_staff.attendance.strategies.overtime_strategy import OvertimeStrategy

START = datetime(2024, 3, 4, 8, 0)
END = datetime(2024, 3, 4, 16, 0)


def test_factory_checkin_on_time():
    strategy = AttendanceStrategyFactory().for_checkin(now=datetime(2024, 3, 4, 7, 45), scheduled_start=START)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(now=datetime(2024, 3, 4, 7, 45), scheduled_start=START).late_minutes == 0


def test_factory_checkin_late_counts_whole_minutes():
    now = datetime(2024, 3, 4, 8, 12, 59)
    strategy = AttendanceStrategyFactory().for_checkin(now=now, scheduled_start=START)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(now=now, scheduled_start=START).late_minutes == 12


def test_factory_checkout_early_leave():
    now = datetime(2024, 3, 4, 15, 40)
    strategy = AttendanceStrategyFactory().for_checkout(now=now, scheduled_end=END)

    assert isinstance(strategy, EarlyLeaveStrategy)
    decision = strategy.decide_checkout(now=now, scheduled_end=END, late_minutes=0)
    assert decision.early_leave_minutes == 20
    assert decision.overtime_minutes == 0


def test_factory_checkout_overtime_makes_up_lateness_first():
    now = datetime(2024, 3, 4, 16, 45)
    strategy = AttendanceStrategyFactory().for_checkout(now=now, scheduled_end=END)

    assert isinstance(strategy, OvertimeStrategy)
    assert strategy.decide_checkout(now=now, scheduled_end=END, late_minutes=0).overtime_minutes == 45
    assert strategy.decide_checkout(now=now, scheduled_end=END, late_minutes=12).overtime_minutes == 33
    assert strategy.decide_checkout(now=now, scheduled_end=END, late_minutes=60).overtime_minutes == 0


def test_factory_checkout_exactly_at_end():
    strategy = AttendanceStrategyFactory().for_checkout(now=END, scheduled_end=END)
    assert isinstance(strategy, NormalStrategy)
