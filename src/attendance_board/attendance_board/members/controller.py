from __future__ import annotations

from flask import Flask, jsonify, request

from ..admins.guard import make_admin_required
from ..common.validators import json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_auth_service)

    @app.route("/api/members", methods=["GET"], endpoint="members_list")
    def members_list():
        """Active members ranked by all-time points, with today's status."""
        roster = container.stats_service.roster()
        return jsonify({"members": [e.to_dict() for e in roster.entries], "todayYmd": roster.today_key})

    @app.route("/api/members", methods=["POST"], endpoint="members_create")
    @admin_required
    def members_create():
        body = json_object(request.get_json(silent=True))
        member = container.member_service.create_member(
            name=body.get("name"),
            phone=body.get("phone"),
            birth_date=body.get("birthDate"),
            photo_url=body.get("photoUrl"),
        )
        return jsonify({"member": member.to_dict()}), 201

    @app.route("/api/members/<member_id>", methods=["PATCH"], endpoint="members_update")
    @admin_required
    def members_update(member_id: str):
        body = json_object(request.get_json(silent=True))
        container.member_service.update_member(
            member_id,
            name=body.get("name"),
            phone=body.get("phone"),
            birth_date=body.get("birthDate"),
            photo_url=body.get("photoUrl"),
        )
        return jsonify({"ok": True})

    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="members_delete")
    @admin_required
    def members_delete(member_id: str):
        container.member_service.deactivate_member(member_id)
        return jsonify({"ok": True})

    @app.route("/api/members/<member_id>/stats", methods=["GET"], endpoint="members_stats")
    def members_stats(member_id: str):
        detail = container.stats_service.member_detail(member_id)
        return jsonify(detail.to_dict())
