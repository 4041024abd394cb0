from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for members.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Member]:
        """Active members in stable retrieval order (by id)."""

        raise NotImplementedError

    def create_member(self, *, name: str, phone: str, birth_date: date, photo_url: str) -> int:
        raise NotImplementedError

    def update_member(self, member_id: int, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def set_active(self, member_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
