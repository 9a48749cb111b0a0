from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    def create_class():
        data = json_body()
        created = container.class_service.create_class(name=data.get("name", ""), grade=data.get("grade", ""))
        return jsonify(to_json(created)), 201

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    def list_classes():
        return jsonify(to_json(list(container.class_service.list_classes())))
