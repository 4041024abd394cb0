from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from werkzeug.security import check_password_hash

from ..common.calendar import now_utc
from ..common.logger import get_logger
from ..core.constants import ADMIN_SESSION_TTL_MINUTES
from ..core.exceptions import AuthenticationError, ValidationError
from .model import AdminSessionView, IssuedSession
from .repository import AdminRepository

log = get_logger("admins")


def generate_session_token() -> str:
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    # Tokens are high-entropy already: a plain digest, no salt or cost factor.
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class AdminAuthService:
    """Use case: admin login and short-lived bearer sessions.

    Lifecycle of a session: issued on login with ``expires_at = now + TTL``;
    ``refresh`` slides the window; an expired row is purged the next time it
    is looked up; ``logout`` purges it immediately. A deactivated admin's
    sessions stop verifying at once. ``verify`` never says *why* it failed.
    """

    def __init__(
        self,
        admins: AdminRepository,
        *,
        ttl_minutes: int = ADMIN_SESSION_TTL_MINUTES,
        token_factory: Callable[[], str] = generate_session_token,
    ):
        self._admins = admins
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._token_factory = token_factory

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def login(self, username: Any, password: Any, *, now: Optional[datetime] = None) -> IssuedSession:
        username_s = username.strip() if isinstance(username, str) else ""
        password_s = password if isinstance(password, str) else ""
        if not username_s or not password_s:
            raise ValidationError("missing_credentials")

        admin = self._admins.get_by_username(username_s)
        if not admin or not admin.is_active:
            log.warning("admin login rejected for %r", username_s)
            raise AuthenticationError("invalid_credentials")

        try:
            ok = check_password_hash(admin.password_hash, password_s)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            log.warning("admin login rejected for %r", username_s)
            raise AuthenticationError("invalid_credentials")

        now = now or now_utc()
        token = self._token_factory()
        expires_at = now + self._ttl
        self._admins.upsert_session(token_hash=hash_token(token), admin_id=admin.admin_id, expires_at=expires_at)
        log.info("admin session issued for %s", admin.username)

        return IssuedSession(token=token, admin_id=admin.admin_id, username=admin.username, expires_at=expires_at)

    def verify(self, token: Optional[str], *, now: Optional[datetime] = None) -> Optional[AdminSessionView]:
        if not token:
            return None

        token_hash = hash_token(token)
        session = self._admins.get_session(token_hash)
        if not session:
            return None

        now = now or now_utc()
        if session.expires_at < now:
            self._admins.delete_session(token_hash)
            log.info("expired admin session purged")
            return None

        admin = self._admins.get_by_id(session.admin_id)
        if not admin or not admin.is_active:
            return None

        return AdminSessionView(
            admin_id=admin.admin_id,
            username=admin.username,
            expires_at=session.expires_at,
            token_hash=token_hash,
        )

    def refresh(self, token: Optional[str], *, now: Optional[datetime] = None) -> Optional[AdminSessionView]:
        """Verify and push the expiry to ``now + TTL``."""
        now = now or now_utc()
        current = self.verify(token, now=now)
        if not current:
            return None

        expires_at = now + self._ttl
        self._admins.update_session_expiry(current.token_hash, expires_at)
        return AdminSessionView(
            admin_id=current.admin_id,
            username=current.username,
            expires_at=expires_at,
            token_hash=current.token_hash,
        )

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        if self._admins.delete_session(hash_token(token)):
            log.info("admin session closed")
