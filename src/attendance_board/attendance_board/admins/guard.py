"""Flask glue for the admin bearer cookie."""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, g, request

from ..core.constants import ADMIN_SESSION_COOKIE
from ..core.exceptions import AuthorizationError
from .model import AdminSessionView
from .service import AdminAuthService


def read_session_token() -> Optional[str]:
    return request.cookies.get(ADMIN_SESSION_COOKIE) or None


def set_session_cookie(response, token: str, *, max_age: int) -> None:
    response.set_cookie(
        ADMIN_SESSION_COOKIE,
        token,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="Lax",
        secure=bool(current_app.config.get("COOKIE_SECURE", True)),
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(ADMIN_SESSION_COOKIE, path="/")


def current_admin(auth: AdminAuthService) -> Optional[AdminSessionView]:
    """Admin session of the current request (looked up once per request)."""
    if "admin" not in g:
        g.admin = auth.verify(read_session_token())
    return g.admin


def make_admin_required(auth: AdminAuthService):
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = read_session_token()
            if current_app.config.get("ADMIN_SESSION_SLIDING", True):
                admin = auth.refresh(token)
                if admin:
                    g.refreshed_token = token
            else:
                admin = auth.verify(token)

            if not admin:
                raise AuthorizationError("unauthorized")

            g.admin = admin
            return view(*args, **kwargs)

        return wrapper

    return admin_required
