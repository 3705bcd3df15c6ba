from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Shift


@dataclass(frozen=True)
class DeviceMetadata:
    user_agent: Optional[str] = None
    platform: Optional[str] = None
    ip_address: Optional[str] = None

    def to_dict(self) -> dict:
        return {"userAgent": self.user_agent, "platform": self.platform, "ipAddress": self.ip_address}


class ShiftRepository(Protocol):
    def get_for_staff_on_date(self, staff_id: str, work_date: date) -> Sequence[Shift]:
        raise NotImplementedError

    def list_for_staff_in_range(self, staff_id: str, start: date, end: date) -> Sequence[Shift]:
        raise NotImplementedError

    def commit_check_in(self, shift: Shift, device: Optional[DeviceMetadata] = None) -> Shift:
        """Persist a shift already transitioned to ``in_progress``.

        Raises ``RemoteError`` when the store refuses the change and
        ``OutcomeUnknownError`` when the commit result cannot be confirmed.
        """

        raise NotImplementedError

    def commit_check_out(self, shift: Shift, device: Optional[DeviceMetadata] = None) -> Shift:
        raise NotImplementedError
