from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/enrollments", methods=["POST"], endpoint="enroll_student")
    def enroll_student():
        data = json_body()
        enrollment = container.enrollment_service.enroll_student(
            user_id=data.get("user_id"),
            class_id=data.get("class_id"),
            student_number=data.get("student_number", ""),
        )
        return jsonify(to_json(enrollment)), 201

    @app.route("/api/classes/<int:class_id>/students", methods=["GET"], endpoint="students_by_class")
    def students_by_class(class_id: int):
        return jsonify(to_json(list(container.enrollment_service.get_students_by_class(class_id))))
