from datetime import datetime, timezone

import mysql.connector
from mysql.connector.errors import PoolError

from src.attendance_board.attendance_board.attendance.mysql_attendance_repository import MySQLAttendanceRepository, _where
from src.attendance_board.attendance_board.common.logger import configure_logging
from src.attendance_board.attendance_board.core.enums import ATTENDED_STATUSES, AttendanceStatus
from src.attendance_board.attendance_board.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.attendance_board.attendance_board.database.connection import DatabaseConnection, DBConfig
from src.attendance_board.attendance_board.database.mysql_base import from_db_datetime, to_db_datetime
from src.attendance_board.attendance_board.main import SCHEMA_PATH


def test_schema_file_splits_into_create_statements():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    tables = [s.split("(")[0].split()[-1].strip("`") for s in statements if s.upper().startswith("CREATE TABLE")]
    assert {"members", "attendance_records", "admins", "admin_sessions"} <= set(tables)
    assert not any(s.upper().startswith(("USE ", "CREATE DATABASE")) for s in statements)


def test_semicolons_inside_quotes_do_not_split():
    sql = "-- comment; here\nINSERT INTO t VALUES ('a;b');\nSELECT 1"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_datetimes_are_stored_as_naive_utc():
    aware = datetime(2024, 1, 1, 15, 0, tzinfo=timezone.utc)

    assert to_db_datetime(aware) == datetime(2024, 1, 1, 15, 0)
    assert from_db_datetime(datetime(2024, 1, 1, 15, 0)) == aware
    assert from_db_datetime("2024-01-01 15:00:00") == aware


def test_where_builder():
    since = datetime(2023, 12, 31, 15, 0, tzinfo=timezone.utc)

    where, params = _where(member_id=3, since=since, statuses=ATTENDED_STATUSES)

    assert where == "WHERE member_id=%s AND attend_date>=%s AND status IN (%s,%s)"
    assert params == (3, datetime(2023, 12, 31, 15, 0), "PRESENT", "LATE")
    assert _where() == ("", ())


class _RecordingCursor:
    def __init__(self, row):
        self.row = row
        self.statements = []
        self.rowcount = 1

    def execute(self, sql, params=()):
        self.statements.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self.row

    def fetchall(self):
        return [self.row]

    def close(self):
        pass


class _RecordingConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        self.closed = True


class _ConnFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def test_attendance_upsert_uses_row_alias():
    day = datetime(2024, 1, 6, 15, 0, tzinfo=timezone.utc)
    cursor = _RecordingCursor(
        {"attendance_id": 7, "member_id": 3, "attend_date": datetime(2024, 1, 6, 15, 0), "status": "LATE", "points": 500}
    )
    conn = _RecordingConnection(cursor)

    record = MySQLAttendanceRepository(_ConnFactory(conn)).upsert(
        member_id=3, day=day, status=AttendanceStatus.LATE, points=500
    )

    insert_sql, insert_params = cursor.statements[0]
    assert "VALUES(%s,%s,%s,%s) AS new ON DUPLICATE KEY UPDATE status=new.status, points=new.points" in insert_sql
    assert "VALUES(status)" not in insert_sql
    assert insert_params == (3, datetime(2024, 1, 6, 15, 0), "LATE", 500)
    assert record.attendance_id == 7
    assert record.attend_date == day
    assert conn.committed and conn.closed


class _ExhaustedOncePool:
    def __init__(self):
        self.calls = 0

    def get_connection(self):
        self.calls += 1
        if self.calls == 1:
            raise PoolError("Failed getting connection; pool exhausted")
        return "pooled"


def test_exhausted_pool_falls_back_to_a_direct_connection(monkeypatch):
    opened = []
    monkeypatch.setattr(mysql.connector, "connect", lambda **kw: opened.append(kw) or "direct")

    pool = _ExhaustedOncePool()
    db = DatabaseConnection(DBConfig(host="db", port=3306, user="u", password="p", database="board"), pool=pool)

    assert db.connect() == "direct"
    assert opened[0]["database"] == "board"
    assert opened[0]["time_zone"] == "+00:00"

    assert db.connect() == "pooled"
    assert len(opened) == 1


def test_configure_logging_does_not_stack_handlers():
    logger = configure_logging(level="WARNING")
    count = len(logger.handlers)

    again = configure_logging(level="DEBUG")

    assert again is logger
    assert len(again.handlers) == count
    assert again.level == 10
