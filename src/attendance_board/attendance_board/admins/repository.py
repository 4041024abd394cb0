from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AdminCredential, AdminSession


class AdminRepository(Protocol):
    """Admin credentials and their sessions (keyed by token hash)."""

    def get_by_id(self, admin_id: int) -> Optional[AdminCredential]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[AdminCredential]:
        raise NotImplementedError

    def upsert_session(self, *, token_hash: str, admin_id: int, expires_at: datetime) -> None:
        raise NotImplementedError

    def get_session(self, token_hash: str) -> Optional[AdminSession]:
        raise NotImplementedError

    def update_session_expiry(self, token_hash: str, expires_at: datetime) -> bool:
        raise NotImplementedError

    def delete_session(self, token_hash: str) -> bool:
        raise NotImplementedError
