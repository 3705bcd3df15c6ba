from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.cache import TTLCache
from .model import Shift
from .repository import DeviceMetadata, ShiftRepository


class CachingShiftRepository:
    """Caches shift list reads; any commit clears the cache."""

    def __init__(self, inner: ShiftRepository, cache: TTLCache):
        self._inner = inner
        self._cache = cache

    def get_for_staff_on_date(self, staff_id: str, work_date: date) -> Sequence[Shift]:
        # today's shift drives check-in/out and is always read fresh
        return self._inner.get_for_staff_on_date(staff_id, work_date)

    def list_for_staff_in_range(self, staff_id: str, start: date, end: date) -> Sequence[Shift]:
        key = ("range", staff_id, start, end)
        return self._cache.get_or_load(key, lambda: tuple(self._inner.list_for_staff_in_range(staff_id, start, end)))

    def commit_check_in(self, shift: Shift, device: Optional[DeviceMetadata] = None) -> Shift:
        try:
            return self._inner.commit_check_in(shift, device)
        finally:
            self._cache.clear()

    def commit_check_out(self, shift: Shift, device: Optional[DeviceMetadata] = None) -> Shift:
        try:
            return self._inner.commit_check_out(shift, device)
        finally:
            self._cache.clear()
