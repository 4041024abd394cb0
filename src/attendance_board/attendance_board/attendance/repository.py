from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import ATTENDED_STATUSES, AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance ledger: at most one record per (member, calendar day).

    ``day`` / ``since`` values are calendar-day instants produced by
    ``common.calendar.day_key_to_instant``. ``since=None`` means all time.
    """

    def upsert(self, *, member_id: int, day: datetime, status: AttendanceStatus, points: int) -> AttendanceRecord:
        """Insert, or overwrite status/points of the existing (member, day) row."""

        raise NotImplementedError

    def delete_for_member_and_day(self, member_id: int, day: datetime) -> bool:
        raise NotImplementedError

    def count_for_member(
        self,
        member_id: int,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> int:
        raise NotImplementedError

    def sum_points_for_member(
        self,
        member_id: int,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> int:
        raise NotImplementedError

    def count_distinct_days(self, *, since: Optional[datetime] = None) -> int:
        raise NotImplementedError

    def status_by_member_on_day(self, day: datetime) -> Dict[int, AttendanceStatus]:
        raise NotImplementedError

    def count_by_member(
        self,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> Dict[int, int]:
        raise NotImplementedError

    def sum_points_by_member(
        self,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> Dict[int, int]:
        raise NotImplementedError

    def count_by_day(
        self,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> Dict[datetime, int]:
        raise NotImplementedError
