from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AdminAuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DatabaseConnection, db_config_from_dict
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .photos.service import PhotoService
from .photos.storage import BlobStorage, SupabaseBlobStorage
from .stats.service import StatsService


@dataclass(frozen=True)
class Container:
    members_repo: MemberRepository
    attendance_repo: AttendanceRepository
    admins_repo: AdminRepository
    storage: BlobStorage

    member_service: MemberService
    attendance_service: AttendanceService
    stats_service: StatsService
    admin_auth_service: AdminAuthService
    photo_service: PhotoService


def assemble(
    *,
    members_repo: MemberRepository,
    attendance_repo: AttendanceRepository,
    admins_repo: AdminRepository,
    storage: BlobStorage,
) -> Container:
    """Wire services on top of the given repositories and storage."""
    return Container(
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        admins_repo=admins_repo,
        storage=storage,
        member_service=MemberService(members_repo),
        attendance_service=AttendanceService(attendance_repo, members_repo),
        stats_service=StatsService(attendance_repo, members_repo),
        admin_auth_service=AdminAuthService(admins_repo),
        photo_service=PhotoService(storage),
    )


def build_container(*, db_config: dict, storage_config: Optional[dict] = None) -> Container:
    storage_config = storage_config or {}

    # One pool per process, passed explicitly to every repository.
    conn = DatabaseConnection(db_config_from_dict(db_config))

    storage = SupabaseBlobStorage(
        url=storage_config.get("url"),
        key=storage_config.get("key"),
        bucket=str(storage_config.get("bucket") or "member-photos"),
    )

    return assemble(
        members_repo=MySQLMemberRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        storage=storage,
    )
