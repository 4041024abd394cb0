from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats", methods=["GET"], endpoint="group_stats")
    def group_stats():
        return jsonify(container.stats_service.group_stats().to_dict())
