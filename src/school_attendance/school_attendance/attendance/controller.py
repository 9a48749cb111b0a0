from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, to_json
from ..core.exceptions import ValidationError
from ..container import Container
from .model import BulkAttendanceEntry


def register(app: Flask, container: Container) -> None:
    def _notes(data: dict):
        # Accept both "note" and the plural "notes" used by older clients.
        return data.get("note", data.get("notes"))

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    def record_attendance():
        data = json_body()
        event = container.attendance_writer.record_single(
            enrollment_id=data.get("student_id"),
            class_id=data.get("class_id"),
            attendance_date=data.get("date"),
            status=data.get("status"),
            recorded_by=data.get("recorded_by"),
            note=_notes(data),
        )
        return jsonify(to_json(event)), 201

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="bulk_record_attendance")
    def bulk_record_attendance():
        data = json_body()
        raw_records = data.get("attendance_records")
        if not isinstance(raw_records, list) or not all(isinstance(r, dict) for r in raw_records):
            raise ValidationError("attendance_records must be a list of objects")

        records = [
            BulkAttendanceEntry(enrollment_id=r.get("student_id"), status=r.get("status"), note=_notes(r))
            for r in raw_records
        ]
        events = container.attendance_writer.record_bulk(
            class_id=data.get("class_id"),
            attendance_date=data.get("date"),
            recorded_by=data.get("recorded_by"),
            records=records,
        )
        return jsonify(to_json(events)), 201

    @app.route("/api/classes/<int:class_id>/attendance", methods=["GET"], endpoint="attendance_by_class_date")
    def attendance_by_class_date(class_id: int):
        date_s = request.args.get("date")
        if not date_s:
            raise ValidationError("date query parameter is required")
        events = container.attendance_aggregator.events_for_class_on(class_id=class_id, on_date=parse_iso_date(date_s))
        return jsonify(to_json(list(events)))
