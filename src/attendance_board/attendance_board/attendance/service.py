from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.calendar import day_key, day_key_to_instant, is_sunday
from ..common.logger import get_logger
from ..common.validators import parse_member_id
from ..core.enums import ATTENDED_STATUSES, AttendanceStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .scoring import points_for

log = get_logger("attendance")


def attendance_rate(count: int, days: int) -> float:
    """count / days, or 0 when no meeting day exists yet."""
    if not days:
        return 0.0
    return count / days


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    day_key: str


@dataclass(frozen=True)
class AbsentResult:
    member_id: int
    day_key: str
    removed: bool


class AttendanceService:
    """Use cases: mark a member PRESENT/LATE or ABSENT for *today*.

    Writes only ever target today's calendar day (UTC+9). Without an admin
    session they are allowed only when today is a Sunday.
    """

    def __init__(self, attendance: AttendanceRepository, members: MemberRepository):
        self._attendance = attendance
        self._members = members

    @staticmethod
    def _parse_status(value: Any) -> AttendanceStatus:
        try:
            status = AttendanceStatus(value)
        except ValueError:
            raise ValidationError("bad_request")
        if status not in ATTENDED_STATUSES:
            raise ValidationError("bad_request")
        return status

    @staticmethod
    def _require_write_access(today_key: str, *, is_admin: bool) -> None:
        if not is_admin and not is_sunday(today_key):
            raise AuthorizationError("admin_required")

    def _require_active_member(self, member_id: int) -> None:
        member = self._members.get_by_id(member_id)
        if not member or not member.is_active:
            raise NotFoundError("not_found")

    def check_in(self, member_id: Any, status: Any, *, is_admin: bool, now: Optional[datetime] = None) -> CheckInResult:
        mid = parse_member_id(member_id)
        st = self._parse_status(status)

        today_key = day_key(now)
        self._require_write_access(today_key, is_admin=is_admin)
        self._require_active_member(mid)

        record = self._attendance.upsert(
            member_id=mid,
            day=day_key_to_instant(today_key),
            status=st,
            points=points_for(st),
        )
        log.info("check-in member=%s day=%s status=%s", mid, today_key, st.value)
        return CheckInResult(record=record, day_key=today_key)

    def mark_absent(self, member_id: Any, *, is_admin: bool, now: Optional[datetime] = None) -> AbsentResult:
        mid = parse_member_id(member_id)

        today_key = day_key(now)
        self._require_write_access(today_key, is_admin=is_admin)

        removed = self._attendance.delete_for_member_and_day(mid, day_key_to_instant(today_key))
        log.info("absent member=%s day=%s removed=%s", mid, today_key, removed)
        return AbsentResult(member_id=mid, day_key=today_key, removed=removed)

