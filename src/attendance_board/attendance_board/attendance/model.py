from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.calendar import day_key
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's attendance on one calendar day.

    ``attend_date`` is local midnight of the day as an aware UTC instant.
    """

    attendance_id: int
    member_id: int
    attend_date: datetime
    status: AttendanceStatus
    points: int

    @property
    def day_key(self) -> str:
        return day_key(self.attend_date)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "memberId": self.member_id,
            "date": self.attend_date.isoformat(),
            "status": self.status.value,
            "points": self.points,
        }
