from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import coerce_date, coerce_optional_date
from ..common.validators import optional_int, require_int
from ..core.constants import RATE_DECIMALS
from ..core.enums import AttendanceStatus
from ..enrollments.repository import EnrollmentRepository
from .model import ReportFilters, SnapshotStats, StudentAttendanceReport

logger = logging.getLogger(__name__)


def attendance_rate(present: int, total: int) -> float:
    """Percentage of ``present`` over ``total``, 0 when nothing was recorded."""
    if total <= 0:
        return 0.0
    # Half-up on the exact ratio, so 0.125 becomes 0.13.
    rate = Decimal(present * 100) / Decimal(total)
    return float(rate.quantize(Decimal(1).scaleb(-RATE_DECIMALS), rounding=ROUND_HALF_UP))


class AttendanceAggregator:
    """Read-only views over stored attendance events.

    Every call recomputes from the repositories; nothing is cached.
    """

    def __init__(self, attendance: AttendanceRepository, enrollments: EnrollmentRepository):
        self._attendance = attendance
        self._enrollments = enrollments

    def snapshot_stats(self, *, on_date: date | str, class_id: Optional[int] = None) -> SnapshotStats:
        on_date = coerce_date(on_date)
        class_id = optional_int(class_id, "class_id")

        total_students = self._enrollments.count(class_id=class_id)
        if total_students == 0:
            return SnapshotStats.empty()

        counts = self._attendance.count_by_status(on_date=on_date, class_id=class_id)
        present = counts.get(AttendanceStatus.PRESENT, 0)
        sick = counts.get(AttendanceStatus.SICK, 0)
        excused = counts.get(AttendanceStatus.EXCUSED, 0)
        absent = counts.get(AttendanceStatus.ABSENT, 0)

        # Rate is over recorded events for the day, not over enrolled students.
        stats = SnapshotStats(
            total_students=total_students,
            present=present,
            sick=sick,
            excused=excused,
            absent=absent,
            attendance_rate=attendance_rate(present, present + sick + excused + absent),
        )
        logger.debug("snapshot for %s class=%s: %s", on_date, class_id, stats)
        return stats

    def historical_report(self, filters: ReportFilters) -> list[StudentAttendanceReport]:
        class_id = optional_int(filters.class_id, "class_id")
        enrollment_id = optional_int(filters.enrollment_id, "student_id")
        start_date = coerce_optional_date(filters.start_date, "start_date")
        end_date = coerce_optional_date(filters.end_date, "end_date")

        population = self._enrollments.list_report_population(class_id=class_id, enrollment_id=enrollment_id)
        if not population:
            return []

        # Events stay under the class stored on them, so a class filter applies to events too.
        events = self._attendance.query_events(
            class_id=class_id,
            enrollment_id=enrollment_id,
            start_date=start_date,
            end_date=end_date,
        )

        by_enrollment: dict[int, Counter] = defaultdict(Counter)
        for event in events:
            by_enrollment[event.enrollment_id][event.status] += 1

        reports: list[StudentAttendanceReport] = []
        for row in population:
            counts = by_enrollment.get(row.enrollment_id, Counter())
            total = sum(counts.values())
            present = counts[AttendanceStatus.PRESENT]
            reports.append(
                StudentAttendanceReport(
                    student_id=row.enrollment_id,
                    student_name=row.student_name,
                    student_number=row.student_number,
                    class_name=row.class_name,
                    total_days=total,
                    present_days=present,
                    sick_days=counts[AttendanceStatus.SICK],
                    excused_days=counts[AttendanceStatus.EXCUSED],
                    absent_days=counts[AttendanceStatus.ABSENT],
                    attendance_rate=attendance_rate(present, total),
                )
            )

        reports.sort(key=lambda r: r.student_name.casefold())
        logger.debug("historical report %s: %d students", filters, len(reports))
        return reports

    def events_for_class_on(self, *, class_id: int, on_date: date | str) -> Sequence[AttendanceEvent]:
        return self._attendance.query_events(
            class_id=require_int(class_id, "class_id"),
            on_date=coerce_date(on_date),
        )
