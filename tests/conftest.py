from __future__ import annotations

from datetime import datetime, timezone

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_board.attendance_board.admins.model import AdminCredential
from src.attendance_board.attendance_board.container import assemble
from tests.fakes import ADMIN_PASSWORD, FakeStorage, InMemoryAdmins, InMemoryAttendance, InMemoryMembers


@pytest.fixture
def fixed_now() -> datetime:
    # 2024-01-07 12:00 KST, a Sunday.
    return datetime(2024, 1, 7, 3, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def weekday_now() -> datetime:
    # 2024-01-08 12:00 KST, a Monday.
    return datetime(2024, 1, 8, 3, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def admins_repo() -> InMemoryAdmins:
    return InMemoryAdmins(
        [AdminCredential(admin_id=1, username="admin", password_hash=generate_password_hash(ADMIN_PASSWORD))]
    )


@pytest.fixture
def container(admins_repo):
    return assemble(
        members_repo=InMemoryMembers(),
        attendance_repo=InMemoryAttendance(),
        admins_repo=admins_repo,
        storage=FakeStorage(),
    )


@pytest.fixture
def app(container):
    from src.attendance_board.attendance_board.main import create_app

    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client
