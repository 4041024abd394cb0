from __future__ import annotations

from flask import Flask, jsonify, request

from ..admins.guard import make_admin_required
from ..common.validators import json_object
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    admin_required = make_admin_required(container.admin_auth_service)

    @app.route("/api/uploads/member-photo", methods=["POST"], endpoint="upload_member_photo")
    @admin_required
    def upload_member_photo():
        if "file" not in request.files:
            raise ValidationError("missing_file")

        data = request.files["file"].read()
        url = container.photo_service.upload_member_photo(data)
        return jsonify({"url": url})

    @app.route("/api/uploads/delete", methods=["POST"], endpoint="delete_upload")
    @admin_required
    def delete_upload():
        body = json_object(request.get_json(silent=True))
        container.photo_service.delete_photo(body.get("url"))
        return jsonify({"ok": True})
