from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..common.calendar import local_year
from ..common.datetime_utils import parse_iso_date
from ..common.logger import get_logger
from ..common.validators import optional_text, parse_member_id, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Member
from .repository import MemberRepository

log = get_logger("members")


def korean_age(birth_date: date, today_key: str) -> int:
    """Korean age: current local year - birth year + 1.

    Month and day are ignored on purpose; the dashboard's 20-and-over
    grouping depends on this exact value.
    """
    return local_year(today_key) - birth_date.year + 1


def _parse_birth_date(value: Any) -> date:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("invalid_birthDate")
    try:
        return parse_iso_date(value.strip()[:10])
    except ValueError:
        raise ValidationError("invalid_birthDate")


class MemberService:
    """Use cases: admin-side member management (create, edit, soft delete)."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def get_active_member(self, member_id: Any) -> Member:
        mid = parse_member_id(member_id, "missing_member_id")
        member = self._members.get_by_id(mid)
        if not member or not member.is_active:
            raise NotFoundError("not_found")
        return member

    def list_active(self):
        return self._members.list_active()

    def create_member(self, *, name: Any, phone: Any, birth_date: Any, photo_url: Any) -> Member:
        name_s = optional_text(name)
        phone_s = optional_text(phone)
        photo_s = optional_text(photo_url)
        birth_s = optional_text(birth_date)
        if not name_s or not phone_s or not birth_s or not photo_s:
            raise ValidationError("missing_fields")

        birth = _parse_birth_date(birth_s)
        member_id = self._members.create_member(name=name_s, phone=phone_s, birth_date=birth, photo_url=photo_s)
        log.info("member created id=%s", member_id)
        return Member(
            member_id=member_id,
            name=name_s,
            phone=phone_s,
            birth_date=birth,
            photo_url=photo_s,
            is_active=True,
        )

    def update_member(
        self,
        member_id: Any,
        *,
        name: Optional[Any] = None,
        phone: Optional[Any] = None,
        birth_date: Optional[Any] = None,
        photo_url: Optional[Any] = None,
    ) -> Member:
        mid = parse_member_id(member_id, "missing_id")

        changes: dict[str, Any] = {}
        if isinstance(name, str):
            changes["name"] = require_non_empty(name, "missing_fields")
        if isinstance(phone, str):
            changes["phone"] = require_non_empty(phone, "missing_fields")
        if isinstance(photo_url, str):
            changes["photo_url"] = require_non_empty(photo_url, "missing_fields")
        if isinstance(birth_date, str) and birth_date:
            changes["birth_date"] = _parse_birth_date(birth_date)

        if not changes:
            raise ValidationError("no_changes")

        current = self._members.get_by_id(mid)
        if not current:
            raise NotFoundError("not_found")

        self._members.update_member(mid, changes)
        log.info("member updated id=%s fields=%s", mid, sorted(changes))
        return Member(
            member_id=mid,
            name=changes.get("name", current.name),
            phone=changes.get("phone", current.phone),
            birth_date=changes.get("birth_date", current.birth_date),
            photo_url=changes.get("photo_url", current.photo_url),
            is_active=current.is_active,
        )

    def deactivate_member(self, member_id: Any) -> None:
        mid = parse_member_id(member_id, "missing_id")
        if not self._members.get_by_id(mid):
            raise NotFoundError("not_found")
        self._members.set_active(mid, is_active=False)
        log.info("member deactivated id=%s", mid)
