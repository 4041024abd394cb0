from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import attendance_rate
from ..common.calendar import day_key, day_key_to_instant, month_start_key, year_start_key
from ..core.enums import ATTENDED_STATUSES, AttendanceStatus
from ..members.model import Member
from ..members.repository import MemberRepository
from ..members.service import MemberService, korean_age


@dataclass(frozen=True)
class RosterEntry:
    member: Member
    year_attendance_count: int
    total_points: int
    today_status: AttendanceStatus

    def to_dict(self) -> dict:
        data = self.member.to_dict()
        data.update(
            {
                "yearAttendanceCount": self.year_attendance_count,
                "totalPoints": self.total_points,
                "todayStatus": self.today_status.value,
            }
        )
        return data


@dataclass(frozen=True)
class Roster:
    today_key: str
    entries: list[RosterEntry]


@dataclass(frozen=True)
class PeriodAttendance:
    present: int
    late: int
    meeting_days: int

    @property
    def count(self) -> int:
        return self.present + self.late

    @property
    def rate(self) -> float:
        return attendance_rate(self.count, self.meeting_days)

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "late": self.late,
            "count": self.count,
            "meetingDays": self.meeting_days,
            "rate": self.rate,
        }


@dataclass(frozen=True)
class MemberDetail:
    member: Member
    age: int
    total_points: int
    year_points: int
    month: PeriodAttendance
    year: PeriodAttendance

    def to_dict(self) -> dict:
        member = self.member.to_dict()
        member["age"] = self.age
        return {
            "member": member,
            "points": {"total": self.total_points, "yearTotal": self.year_points},
            "attendance": {"month": self.month.to_dict(), "year": self.year.to_dict()},
        }


@dataclass(frozen=True)
class PeriodTotals:
    performed_days: int
    total_attendance: int

    @property
    def avg_attendance(self) -> float:
        return attendance_rate(self.total_attendance, self.performed_days)

    def to_dict(self) -> dict:
        return {
            "performedDays": self.performed_days,
            "totalAttendance": self.total_attendance,
            "avgAttendance": self.avg_attendance,
        }


@dataclass(frozen=True)
class GroupStats:
    today_key: str
    today_count: int
    month: PeriodTotals
    all_time: PeriodTotals

    def to_dict(self) -> dict:
        return {
            "todayYmd": self.today_key,
            "todayCount": self.today_count,
            "month": self.month.to_dict(),
            "all": self.all_time.to_dict(),
        }


class StatsService:
    """Read side: ranked roster, per-member rates and group-wide averages.

    Rates divide by the number of *meeting days*: distinct days on which any
    member has a record, whether or not this member attended.
    """

    def __init__(self, attendance: AttendanceRepository, members: MemberRepository):
        self._attendance = attendance
        self._members = members
        self._member_service = MemberService(members)

    def roster(self, *, now: Optional[datetime] = None) -> Roster:
        today_key = day_key(now)
        year_start = day_key_to_instant(year_start_key(today_key))

        year_counts = self._attendance.count_by_member(since=year_start)
        point_totals = self._attendance.sum_points_by_member()
        today = self._attendance.status_by_member_on_day(day_key_to_instant(today_key))

        entries = [
            RosterEntry(
                member=m,
                year_attendance_count=year_counts.get(m.member_id, 0),
                total_points=point_totals.get(m.member_id, 0),
                today_status=today.get(m.member_id, AttendanceStatus.ABSENT),
            )
            for m in self._members.list_active()
        ]
        # sorted() is stable: equal totals keep retrieval order.
        entries = sorted(entries, key=lambda e: e.total_points, reverse=True)
        return Roster(today_key=today_key, entries=entries)

    def _period(self, member_id: int, since: datetime) -> PeriodAttendance:
        return PeriodAttendance(
            present=self._attendance.count_for_member(member_id, since=since, statuses=(AttendanceStatus.PRESENT,)),
            late=self._attendance.count_for_member(member_id, since=since, statuses=(AttendanceStatus.LATE,)),
            meeting_days=self._attendance.count_distinct_days(since=since),
        )

    def member_detail(self, member_id: Any, *, now: Optional[datetime] = None) -> MemberDetail:
        member = self._member_service.get_active_member(member_id)

        today_key = day_key(now)
        month_start = day_key_to_instant(month_start_key(today_key))
        year_start = day_key_to_instant(year_start_key(today_key))

        return MemberDetail(
            member=member,
            age=korean_age(member.birth_date, today_key),
            total_points=self._attendance.sum_points_for_member(member.member_id),
            year_points=self._attendance.sum_points_for_member(member.member_id, since=year_start),
            month=self._period(member.member_id, month_start),
            year=self._period(member.member_id, year_start),
        )

    def _totals(self, since: Optional[datetime]) -> PeriodTotals:
        per_day = self._attendance.count_by_day(since=since, statuses=ATTENDED_STATUSES)
        return PeriodTotals(
            performed_days=self._attendance.count_distinct_days(since=since),
            total_attendance=sum(per_day.values()),
        )

    def group_stats(self, *, now: Optional[datetime] = None) -> GroupStats:
        today_key = day_key(now)
        today = self._attendance.status_by_member_on_day(day_key_to_instant(today_key))

        return GroupStats(
            today_key=today_key,
            today_count=sum(1 for s in today.values() if s in ATTENDED_STATUSES),
            month=self._totals(day_key_to_instant(month_start_key(today_key))),
            all_time=self._totals(None),
        )
