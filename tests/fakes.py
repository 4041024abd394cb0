"""In-memory repository and storage fakes shared by the test modules."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from src.attendance_board.attendance_board.admins.model import AdminCredential, AdminSession
from src.attendance_board.attendance_board.attendance.model import AttendanceRecord
from src.attendance_board.attendance_board.core.enums import ATTENDED_STATUSES
from src.attendance_board.attendance_board.members.model import Member


class InMemoryMembers:
    def __init__(self, members: Optional[list[Member]] = None):
        self._by_id: dict[int, Member] = {}
        self._id = 0
        for m in members or []:
            self._by_id[m.member_id] = m
            self._id = max(self._id, m.member_id)

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self._by_id.get(int(member_id))

    def list_active(self):
        return [m for _, m in sorted(self._by_id.items()) if m.is_active]

    def create_member(self, *, name, phone, birth_date, photo_url) -> int:
        self._id += 1
        self._by_id[self._id] = Member(
            member_id=self._id,
            name=name,
            phone=phone,
            birth_date=birth_date,
            photo_url=photo_url,
            is_active=True,
        )
        return self._id

    def update_member(self, member_id, changes) -> bool:
        m = self._by_id.get(int(member_id))
        if not m:
            return False
        self._by_id[m.member_id] = Member(
            member_id=m.member_id,
            name=changes.get("name", m.name),
            phone=changes.get("phone", m.phone),
            birth_date=changes.get("birth_date", m.birth_date),
            photo_url=changes.get("photo_url", m.photo_url),
            is_active=m.is_active,
        )
        return True

    def set_active(self, member_id, *, is_active: bool) -> bool:
        m = self._by_id.get(int(member_id))
        if not m:
            return False
        self._by_id[m.member_id] = Member(
            member_id=m.member_id,
            name=m.name,
            phone=m.phone,
            birth_date=m.birth_date,
            photo_url=m.photo_url,
            is_active=is_active,
        )
        return True


class InMemoryAttendance:
    """Dict keyed by (member_id, day): the unique constraint by construction."""

    def __init__(self):
        self._rows: dict[tuple[int, datetime], AttendanceRecord] = {}
        self._id = 0

    def all(self) -> list[AttendanceRecord]:
        return list(self._rows.values())

    def _select(self, *, member_id=None, since=None, statuses=None):
        for r in self._rows.values():
            if member_id is not None and r.member_id != member_id:
                continue
            if since is not None and r.attend_date < since:
                continue
            if statuses is not None and r.status not in statuses:
                continue
            yield r

    def upsert(self, *, member_id, day, status, points) -> AttendanceRecord:
        key = (member_id, day)
        existing = self._rows.get(key)
        if existing:
            attendance_id = existing.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        rec = AttendanceRecord(
            attendance_id=attendance_id,
            member_id=member_id,
            attend_date=day,
            status=status,
            points=points,
        )
        self._rows[key] = rec
        return rec

    def delete_for_member_and_day(self, member_id, day) -> bool:
        return self._rows.pop((member_id, day), None) is not None

    def count_for_member(self, member_id, *, since=None, statuses=ATTENDED_STATUSES) -> int:
        return sum(1 for _ in self._select(member_id=member_id, since=since, statuses=statuses))

    def sum_points_for_member(self, member_id, *, since=None, statuses=ATTENDED_STATUSES) -> int:
        return sum(r.points for r in self._select(member_id=member_id, since=since, statuses=statuses))

    def count_distinct_days(self, *, since=None) -> int:
        return len({r.attend_date for r in self._select(since=since)})

    def status_by_member_on_day(self, day):
        return {r.member_id: r.status for r in self._rows.values() if r.attend_date == day}

    def count_by_member(self, *, since=None, statuses=ATTENDED_STATUSES):
        out: dict[int, int] = {}
        for r in self._select(since=since, statuses=statuses):
            out[r.member_id] = out.get(r.member_id, 0) + 1
        return out

    def sum_points_by_member(self, *, since=None, statuses=ATTENDED_STATUSES):
        out: dict[int, int] = {}
        for r in self._select(since=since, statuses=statuses):
            out[r.member_id] = out.get(r.member_id, 0) + r.points
        return out

    def count_by_day(self, *, since=None, statuses=ATTENDED_STATUSES):
        out: dict[datetime, int] = {}
        for r in self._select(since=since, statuses=statuses):
            out[r.attend_date] = out.get(r.attend_date, 0) + 1
        return out


class InMemoryAdmins:
    def __init__(self, admins: Optional[list[AdminCredential]] = None):
        self.admins: dict[int, AdminCredential] = {a.admin_id: a for a in admins or []}
        self.sessions: dict[str, AdminSession] = {}

    def get_by_id(self, admin_id):
        return self.admins.get(int(admin_id))

    def get_by_username(self, username):
        return next((a for a in self.admins.values() if a.username == username), None)

    def upsert_session(self, *, token_hash, admin_id, expires_at) -> None:
        self.sessions[token_hash] = AdminSession(token_hash=token_hash, admin_id=admin_id, expires_at=expires_at)

    def get_session(self, token_hash):
        return self.sessions.get(token_hash)

    def update_session_expiry(self, token_hash, expires_at) -> bool:
        s = self.sessions.get(token_hash)
        if not s:
            return False
        self.sessions[token_hash] = AdminSession(token_hash=s.token_hash, admin_id=s.admin_id, expires_at=expires_at)
        return True

    def delete_session(self, token_hash) -> bool:
        return self.sessions.pop(token_hash, None) is not None


class FakeStorage:
    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []

    def put(self, key, data, content_type):
        self.objects[key] = (data, content_type)
        return f"https://cdn.example.test/{key}"

    def delete(self, url):
        self.deleted.append(url)


ADMIN_PASSWORD = "pw-admin"


def make_member(member_id: int, name: str = "M", *, birth: date = date(2000, 1, 1), active: bool = True) -> Member:
    return Member(
        member_id=member_id,
        name=name,
        phone=f"010-0000-{member_id:04d}",
        birth_date=birth,
        photo_url=f"https://cdn.example.test/members/{member_id}.webp",
        is_active=active,
    )
