from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Member
from .repository import MemberRepository

# Whitelist of columns an update may touch.
_UPDATABLE = ("name", "phone", "birth_date", "photo_url")


def _to_member(row: dict) -> Member:
    return Member(
        member_id=int(row["member_id"]),
        name=row["name"],
        phone=row["phone"],
        birth_date=normalize_mysql_date(row["birth_date"]),
        photo_url=row["photo_url"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, name, phone, birth_date, photo_url, is_active
                FROM members
                WHERE member_id=%s
                """,
                (int(member_id),),
            )
            row = fetchone(cur)
            return _to_member(row) if row else None

    def list_active(self) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, name, phone, birth_date, photo_url, is_active
                FROM members
                WHERE is_active=1
                ORDER BY member_id ASC
                """
            )
            return [_to_member(r) for r in fetchall(cur)]

    def create_member(self, *, name: str, phone: str, birth_date: date, photo_url: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(name, phone, birth_date, photo_url, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (name, phone, birth_date, photo_url),
            )
            return int(cur.lastrowid)

    def update_member(self, member_id: int, changes: Mapping[str, Any]) -> bool:
        columns = [c for c in _UPDATABLE if c in changes]
        if not columns:
            return False

        assignments = ", ".join(f"{c}=%s" for c in columns)
        params = tuple(changes[c] for c in columns) + (int(member_id),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE members SET {assignments} WHERE member_id=%s", params)
            return cur.rowcount > 0

    def set_active(self, member_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET is_active=%s WHERE member_id=%s",
                (1 if is_active else 0, int(member_id)),
            )
            return cur.rowcount > 0
