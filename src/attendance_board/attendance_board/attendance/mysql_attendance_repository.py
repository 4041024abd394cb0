from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Sequence

from ..core.enums import ATTENDED_STATUSES, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, in_clause, to_db_datetime
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _where(
    *,
    member_id: Optional[int] = None,
    day: Optional[datetime] = None,
    since: Optional[datetime] = None,
    statuses: Optional[Sequence[AttendanceStatus]] = None,
) -> tuple[str, tuple]:
    clauses: list[str] = []
    params: list[object] = []

    if member_id is not None:
        clauses.append("member_id=%s")
        params.append(int(member_id))
    if day is not None:
        clauses.append("attend_date=%s")
        params.append(to_db_datetime(day))
    if since is not None:
        clauses.append("attend_date>=%s")
        params.append(to_db_datetime(since))
    if statuses is not None:
        placeholders, values = in_clause(AttendanceStatus(s).value for s in statuses)
        clauses.append(f"status IN {placeholders}")
        params.extend(values)

    if not clauses:
        return "", ()
    return "WHERE " + " AND ".join(clauses), tuple(params)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        member_id=int(r["member_id"]),
        attend_date=from_db_datetime(r["attend_date"]),
        status=AttendanceStatus(r["status"]),
        points=int(r["points"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, *, member_id: int, day: datetime, status: AttendanceStatus, points: int) -> AttendanceRecord:
        # UNIQUE(member_id, attend_date) makes this a single atomic statement.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(member_id, attend_date, status, points)
                VALUES(%s,%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE status=new.status, points=new.points
                """,
                (int(member_id), to_db_datetime(day), AttendanceStatus(status).value, int(points)),
            )
            where, params = _where(member_id=member_id, day=day)
            cur.execute(
                f"""
                SELECT attendance_id, member_id, attend_date, status, points
                FROM attendance_records
                {where}
                """,
                params,
            )
            return _to_record(fetchone(cur))

    def delete_for_member_and_day(self, member_id: int, day: datetime) -> bool:
        where, params = _where(member_id=member_id, day=day)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM attendance_records {where}", params)
            return cur.rowcount > 0

    def count_for_member(
        self,
        member_id: int,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> int:
        where, params = _where(member_id=member_id, since=since, statuses=statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_records {where}", params)
            return int(fetchone(cur)["n"])

    def sum_points_for_member(
        self,
        member_id: int,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> int:
        where, params = _where(member_id=member_id, since=since, statuses=statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COALESCE(SUM(points), 0) AS total FROM attendance_records {where}", params)
            return int(fetchone(cur)["total"])

    def count_distinct_days(self, *, since: Optional[datetime] = None) -> int:
        where, params = _where(since=since)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(DISTINCT attend_date) AS n FROM attendance_records {where}", params)
            return int(fetchone(cur)["n"])

    def status_by_member_on_day(self, day: datetime) -> Dict[int, AttendanceStatus]:
        where, params = _where(day=day)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT member_id, status FROM attendance_records {where}", params)
            return {int(r["member_id"]): AttendanceStatus(r["status"]) for r in fetchall(cur)}

    def count_by_member(
        self,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> Dict[int, int]:
        where, params = _where(since=since, statuses=statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT member_id, COUNT(*) AS n FROM attendance_records {where} GROUP BY member_id",
                params,
            )
            return {int(r["member_id"]): int(r["n"]) for r in fetchall(cur)}

    def sum_points_by_member(
        self,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> Dict[int, int]:
        where, params = _where(since=since, statuses=statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT member_id, COALESCE(SUM(points), 0) AS total
                FROM attendance_records
                {where}
                GROUP BY member_id
                """,
                params,
            )
            return {int(r["member_id"]): int(r["total"]) for r in fetchall(cur)}

    def count_by_day(
        self,
        *,
        since: Optional[datetime] = None,
        statuses: Sequence[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> Dict[datetime, int]:
        where, params = _where(since=since, statuses=statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT attend_date, COUNT(*) AS n
                FROM attendance_records
                {where}
                GROUP BY attend_date
                ORDER BY attend_date
                """,
                params,
            )
            return {from_db_datetime(r["attend_date"]): int(r["n"]) for r in fetchall(cur)}
