from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_db_datetime, to_db_datetime
from .model import AdminCredential, AdminSession
from .repository import AdminRepository


def _to_credential(row: dict) -> AdminCredential:
    return AdminCredential(
        admin_id=int(row["admin_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, admin_id: int) -> Optional[AdminCredential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, username, password_hash, is_active FROM admins WHERE admin_id=%s",
                (int(admin_id),),
            )
            row = fetchone(cur)
            return _to_credential(row) if row else None

    def get_by_username(self, username: str) -> Optional[AdminCredential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, username, password_hash, is_active FROM admins WHERE username=%s",
                (username,),
            )
            row = fetchone(cur)
            return _to_credential(row) if row else None

    def upsert_session(self, *, token_hash: str, admin_id: int, expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admin_sessions(token_hash, admin_id, expires_at)
                VALUES(%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE admin_id=new.admin_id, expires_at=new.expires_at
                """,
                (token_hash, int(admin_id), to_db_datetime(expires_at)),
            )

    def get_session(self, token_hash: str) -> Optional[AdminSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT token_hash, admin_id, expires_at FROM admin_sessions WHERE token_hash=%s",
                (token_hash,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AdminSession(
                token_hash=row["token_hash"],
                admin_id=int(row["admin_id"]),
                expires_at=from_db_datetime(row["expires_at"]),
            )

    def update_session_expiry(self, token_hash: str, expires_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE admin_sessions SET expires_at=%s WHERE token_hash=%s",
                (to_db_datetime(expires_at), token_hash),
            )
            return cur.rowcount > 0

    def delete_session(self, token_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM admin_sessions WHERE token_hash=%s", (token_hash,))
            return cur.rowcount > 0
