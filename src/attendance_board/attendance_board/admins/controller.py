from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.validators import json_object
from ..container import Container
from .guard import clear_session_cookie, current_admin, read_session_token, set_session_cookie


def register(app: Flask, container: Container) -> None:
    auth = container.admin_auth_service

    @app.after_request
    def rearm_session_cookie(response):
        # Sliding window: a refreshed session gets a fresh cookie max-age too.
        token = g.pop("refreshed_token", None)
        if token:
            set_session_cookie(response, token, max_age=auth.ttl_seconds)
        return response

    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        body = json_object(request.get_json(silent=True))
        issued = auth.login(body.get("username"), body.get("password"))

        response = jsonify({"ok": True, "expiresAt": issued.expires_at.isoformat()})
        set_session_cookie(response, issued.token, max_age=auth.ttl_seconds)
        return response

    @app.route("/api/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        auth.logout(read_session_token())
        response = jsonify({"ok": True})
        clear_session_cookie(response)
        return response

    @app.route("/api/admin/me", methods=["GET"], endpoint="admin_me")
    def admin_me():
        admin = current_admin(auth)
        if not admin:
            return jsonify({"isAdmin": False})
        return jsonify(
            {
                "isAdmin": True,
                "adminId": admin.admin_id,
                "username": admin.username,
                "expiresAt": admin.expires_at.isoformat(),
            }
        )
