from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminCredential:
    admin_id: int
    username: str
    password_hash: str
    is_active: bool = True


@dataclass(frozen=True)
class AdminSession:
    """Stored session row. Only the token digest is ever persisted."""

    token_hash: str
    admin_id: int
    expires_at: datetime


@dataclass(frozen=True)
class AdminSessionView:
    """What a successful ``verify`` hands back to callers."""

    admin_id: int
    username: str
    expires_at: datetime
    token_hash: str


@dataclass(frozen=True)
class IssuedSession:
    """Result of a login: the plaintext token is only available here."""

    token: str
    admin_id: int
    username: str
    expires_at: datetime
