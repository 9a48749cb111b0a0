"""Example: use the service layer directly (no Flask).

Controllers stay thin; the writer and aggregator hold the attendance rules.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.reports.model import ReportFilters


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    print(container.attendance_aggregator.snapshot_stats(on_date=date.today()))
    for row in container.attendance_aggregator.historical_report(ReportFilters(class_id=1)):
        print(f"{row.student_name:<20} {row.present_days}/{row.total_days} ({row.attendance_rate}%)")


if __name__ == "__main__":
    main()
