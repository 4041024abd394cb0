from __future__ import annotations

from flask import Flask, jsonify, request

from ..admins.guard import current_admin
from ..common.validators import json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _is_admin() -> bool:
        return current_admin(container.admin_auth_service) is not None

    @app.route("/api/attendance/check", methods=["POST"], endpoint="attendance_check")
    def attendance_check():
        """Mark a member PRESENT or LATE today (upsert: same day overwrites)."""
        body = json_object(request.get_json(silent=True))
        result = container.attendance_service.check_in(
            body.get("memberId"),
            body.get("status"),
            is_admin=_is_admin(),
        )
        return jsonify({"record": result.record.to_dict(), "todayYmd": result.day_key})

    @app.route("/api/attendance/absent", methods=["POST"], endpoint="attendance_absent")
    def attendance_absent():
        """Remove today's record; succeeds whether or not one existed."""
        body = json_object(request.get_json(silent=True))
        result = container.attendance_service.mark_absent(body.get("memberId"), is_admin=_is_admin())
        return jsonify({"ok": True, "todayYmd": result.day_key})
