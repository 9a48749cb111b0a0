from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    def create_user():
        data = json_body()
        user = container.user_service.create_user(
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=data.get("role", ""),
        )
        return jsonify(to_json(user)), 201

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        return jsonify(to_json(list(container.user_service.list_users())))
