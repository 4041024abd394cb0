from __future__ import annotations

import pytest

from src.attendance_board.attendance_board.attendance.service import AttendanceService, attendance_rate
from src.attendance_board.attendance_board.common.calendar import day_key_to_instant
from src.attendance_board.attendance_board.core.enums import AttendanceStatus
from src.attendance_board.attendance_board.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from tests.fakes import InMemoryAttendance, InMemoryMembers, make_member


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def svc(attendance):
    members = InMemoryMembers([make_member(1, "Kim"), make_member(2, "Lee"), make_member(3, "Park", active=False)])
    return AttendanceService(attendance, members)


def test_check_in_writes_todays_record(svc, attendance, fixed_now):
    result = svc.check_in(1, "PRESENT", is_admin=False, now=fixed_now)

    assert result.day_key == "2024-01-07"
    assert result.record.status == AttendanceStatus.PRESENT
    assert result.record.points == 1000
    assert result.record.attend_date == day_key_to_instant("2024-01-07")
    assert result.record.day_key == "2024-01-07"
    assert len(attendance.all()) == 1


def test_check_in_is_an_upsert_per_member_and_day(svc, attendance, fixed_now):
    first = svc.check_in(1, "PRESENT", is_admin=False, now=fixed_now)
    again = svc.check_in(1, "PRESENT", is_admin=False, now=fixed_now)
    late = svc.check_in(1, "LATE", is_admin=False, now=fixed_now)

    assert again.record.attendance_id == first.record.attendance_id
    assert late.record.status == AttendanceStatus.LATE
    assert late.record.points == 500
    assert len(attendance.all()) == 1


def test_member_id_as_numeric_string(svc, fixed_now):
    result = svc.check_in("2", "LATE", is_admin=False, now=fixed_now)
    assert result.record.member_id == 2


def test_mark_absent_removes_record(svc, attendance, fixed_now):
    svc.check_in(1, "PRESENT", is_admin=False, now=fixed_now)

    result = svc.mark_absent(1, is_admin=False, now=fixed_now)

    assert result.removed is True
    assert attendance.all() == []


def test_mark_absent_without_record_is_a_no_op(svc, attendance, fixed_now):
    result = svc.mark_absent(1, is_admin=False, now=fixed_now)

    assert result.removed is False
    assert result.day_key == "2024-01-07"
    assert attendance.all() == []


def test_weekday_writes_need_an_admin(svc, attendance, weekday_now):
    with pytest.raises(AuthorizationError) as exc:
        svc.check_in(1, "PRESENT", is_admin=False, now=weekday_now)
    assert exc.value.code == "admin_required"

    with pytest.raises(AuthorizationError):
        svc.mark_absent(1, is_admin=False, now=weekday_now)

    assert attendance.all() == []


def test_admin_may_write_on_a_weekday(svc, weekday_now):
    result = svc.check_in(1, "PRESENT", is_admin=True, now=weekday_now)
    assert result.day_key == "2024-01-08"


@pytest.mark.parametrize("member_id", [99, 3])
def test_unknown_or_inactive_member(svc, fixed_now, member_id):
    with pytest.raises(NotFoundError) as exc:
        svc.check_in(member_id, "PRESENT", is_admin=True, now=fixed_now)
    assert exc.value.code == "not_found"


@pytest.mark.parametrize(
    "member_id,status",
    [(None, "PRESENT"), ("abc", "PRESENT"), (0, "PRESENT"), (True, "PRESENT"), (1, "ABSENT"), (1, "EARLY"), (1, None)],
)
def test_bad_input(svc, fixed_now, member_id, status):
    with pytest.raises(ValidationError) as exc:
        svc.check_in(member_id, status, is_admin=True, now=fixed_now)
    assert exc.value.code == "bad_request"


def test_bad_input_is_reported_before_the_sunday_gate(svc, weekday_now):
    with pytest.raises(ValidationError):
        svc.check_in(1, "EARLY", is_admin=False, now=weekday_now)


def test_attendance_rate():
    assert attendance_rate(0, 0) == 0.0
    assert attendance_rate(3, 4) == 0.75


@pytest.mark.parametrize("member_id", [99, 3])
def test_mark_absent_reports_success_for_unknown_or_inactive_member(svc, attendance, fixed_now, member_id):
    result = svc.mark_absent(member_id, is_admin=False, now=fixed_now)

    assert result.removed is False
    assert result.day_key == "2024-01-07"
    assert attendance.all() == []
