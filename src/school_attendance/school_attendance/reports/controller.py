from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_iso_date, parse_optional_date, today_local
from ..common.http import to_json
from ..common.validators import optional_int
from ..container import Container
from .model import ReportFilters


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        date_s = request.args.get("date")
        on_date = parse_iso_date(date_s) if date_s else today_local()
        stats = container.attendance_aggregator.snapshot_stats(
            on_date=on_date,
            class_id=optional_int(request.args.get("class_id"), "class_id"),
        )
        body = to_json(stats)
        body["date"] = format_iso_date(on_date)
        return jsonify(body)

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        filters = ReportFilters(
            class_id=optional_int(request.args.get("class_id"), "class_id"),
            enrollment_id=optional_int(request.args.get("student_id"), "student_id"),
            start_date=parse_optional_date(request.args.get("start_date")),
            end_date=parse_optional_date(request.args.get("end_date")),
        )
        return jsonify(to_json(container.attendance_aggregator.historical_report(filters)))
