from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_hhmm(value: Union[str, time, None]) -> Optional[time]:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) string. ``None``/blank stays ``None``."""
    if value is None or isinstance(value, time):
        return value
    v = value.strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {value!r}, expected HH:MM")


def minutes_of_day(value: Union[time, datetime]) -> int:
    return value.hour * 60 + value.minute


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


@dataclass(frozen=True)
class Period:
    """Inclusive date range used for attendance summaries and payroll."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError("Period end must not precede its start")

    @classmethod
    def for_month(cls, label: str) -> "Period":
        try:
            year, month = (int(p) for p in label.split("-"))
            last_day = calendar.monthrange(year, month)[1]
        except (AttributeError, ValueError, calendar.IllegalMonthError):
            raise ValidationError(f"Invalid period {label!r}, expected YYYY-MM")
        return cls(start=date(year, month, 1), end=date(year, month, last_day))

    @property
    def label(self) -> str:
        if self.start.day == 1 and (self.start.year, self.start.month) == (self.end.year, self.end.month):
            if self.end.day == calendar.monthrange(self.end.year, self.end.month)[1]:
                return self.start.strftime("%Y-%m")
        return f"{self.start.isoformat()}..{self.end.isoformat()}"

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end
