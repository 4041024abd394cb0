"""Seed demo members, today's attendance and the admin account."""
from __future__ import annotations

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_board.attendance_board.attendance.scoring import points_for
from src.attendance_board.attendance_board.common.calendar import day_key, day_key_to_instant
from src.attendance_board.attendance_board.container import build_container
from src.attendance_board.attendance_board.core.enums import AttendanceStatus
from src.attendance_board.attendance_board.database.bootstrap import ensure_admin_account

# (name, phone, birth date). The first four are under 20 (Korean age).
DEMO_MEMBERS = [
    ("김하늘", "010-2345-6789", date(2008, 3, 14)),
    ("이서준", "010-3456-7890", date(2007, 11, 2)),
    ("박지안", "010-4567-8901", date(2009, 6, 20)),
    ("최민준", "010-5678-9012", date(2006, 9, 8)),
    ("정유진", "010-6789-0123", date(2003, 1, 22)),
    ("한도윤", "010-7890-1234", date(2002, 5, 17)),
    ("신지우", "010-8901-2345", date(2000, 12, 5)),
    ("윤서연", "010-9012-3456", date(1999, 8, 30)),
    ("오태훈", "010-1122-3344", date(1998, 4, 11)),
    ("장수민", "010-2233-4455", date(2001, 10, 9)),
    ("문예은", "010-3344-5566", date(2004, 7, 27)),
    ("임지훈", "010-4455-6677", date(2005, 2, 3)),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    container = build_container(db_config=db_config)

    existing = {(m.name, m.phone): m.member_id for m in container.members_repo.list_active()}
    member_ids: list[int] = []
    for i, (name, phone, birth) in enumerate(DEMO_MEMBERS, start=1):
        member_id = existing.get((name, phone))
        if member_id is None:
            member_id = container.members_repo.create_member(
                name=name,
                phone=phone,
                birth_date=birth,
                photo_url=f"https://picsum.photos/seed/m{i}/400/400",
            )
        member_ids.append(member_id)

    # Today: first six PRESENT, next two LATE.
    today = day_key_to_instant(day_key())
    for member_id, status in [(m, AttendanceStatus.PRESENT) for m in member_ids[:6]] + [
        (m, AttendanceStatus.LATE) for m in member_ids[6:8]
    ]:
        container.attendance_repo.upsert(member_id=member_id, day=today, status=status, points=points_for(status))

    username = getattr(settings, "ADMIN_USERNAME", None)
    password = getattr(settings, "ADMIN_PASSWORD", None)
    if username and password:
        ensure_admin_account(db_config, username=username, password=password)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(members={len(member_ids)})"
    )


if __name__ == "__main__":
    main()
