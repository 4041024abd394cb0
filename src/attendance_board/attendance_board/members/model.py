from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import format_iso_date


@dataclass(frozen=True)
class Member:
    """Domain entity: a tracked member.

    Note: Members are never physically deleted; ``is_active=False`` hides them.
    """

    member_id: int
    name: str
    phone: str
    birth_date: date
    photo_url: str
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.member_id,
            "name": self.name,
            "phone": self.phone,
            "birthDate": format_iso_date(self.birth_date),
            "photoUrl": self.photo_url,
            "isActive": self.is_active,
        }
