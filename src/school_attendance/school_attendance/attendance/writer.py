from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.datetime_utils import coerce_date
from ..common.validators import normalize_note, parse_status, require_int
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    ConflictError,
    InvalidMembershipError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from ..enrollments.repository import EnrollmentRepository
from ..users.repository import UserRepository
from .model import AttendanceEvent, BulkAttendanceEntry, NewAttendanceEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceWriter:
    """Use case: validate attendance payloads and append events.

    Every check runs before the single insert call, so a rejected request
    leaves storage untouched. The storage UNIQUE(enrollment, date) key is
    still the final guard against concurrent writers.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        enrollments: EnrollmentRepository,
        classes: ClassRepository,
        users: UserRepository,
    ):
        self._attendance = attendance
        self._enrollments = enrollments
        self._classes = classes
        self._users = users

    def record_single(
        self,
        *,
        enrollment_id: int,
        class_id: int,
        attendance_date: date | str,
        status: AttendanceStatus | str,
        recorded_by: int,
        note: Optional[str] = None,
    ) -> AttendanceEvent:
        enrollment_id = require_int(enrollment_id, "student_id")
        class_id = require_int(class_id, "class_id")
        recorded_by = require_int(recorded_by, "recorded_by")
        attendance_date = coerce_date(attendance_date)
        status = parse_status(status)

        enrollment = self._enrollments.get_by_id(enrollment_id)
        if not enrollment:
            raise NotFoundError("Student", enrollment_id)

        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class", class_id)

        # Recording is not role-restricted here, only bulk recording is.
        if not self._users.get_by_id(recorded_by):
            raise NotFoundError("User", recorded_by)

        if enrollment.class_id != class_id:
            logger.warning(
                "rejected attendance: student %s belongs to class %s, not %s",
                enrollment_id,
                enrollment.class_id,
                class_id,
            )
            raise InvalidMembershipError(class_id, [enrollment_id])

        if self._attendance.get_for_enrollment_and_date(enrollment_id, attendance_date):
            logger.warning("rejected attendance: student %s already recorded on %s", enrollment_id, attendance_date)
            raise ConflictError(f"Attendance already recorded for student {enrollment_id} on {attendance_date}")

        (event,) = self._attendance.insert_events(
            [
                NewAttendanceEvent(
                    enrollment_id=enrollment_id,
                    class_id=class_id,
                    attendance_date=attendance_date,
                    status=status,
                    recorded_by=recorded_by,
                    note=normalize_note(note),
                )
            ]
        )
        logger.info(
            "recorded %s for student %s in class %s on %s (event %s)",
            event.status.value,
            enrollment_id,
            class_id,
            attendance_date,
            event.attendance_id,
        )
        return event

    def record_bulk(
        self,
        *,
        class_id: int,
        attendance_date: date | str,
        recorded_by: int,
        records: Sequence[BulkAttendanceEntry],
    ) -> list[AttendanceEvent]:
        class_id = require_int(class_id, "class_id")
        recorded_by = require_int(recorded_by, "recorded_by")
        attendance_date = coerce_date(attendance_date)
        entries = [self._normalize_entry(r) for r in records]
        if not entries:
            raise ValidationError("attendance_records must contain at least one record")

        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class", class_id)

        recorder = self._users.get_by_id(recorded_by)
        if not recorder:
            raise NotFoundError("User", recorded_by)
        if recorder.role != Role.TEACHER:
            logger.warning("rejected bulk attendance: user %s is not a teacher", recorded_by)
            raise PermissionDeniedError("Only teachers can record attendance")

        requested_ids = [e.enrollment_id for e in entries]
        members = {e.enrollment_id for e in self._enrollments.list_by_class(class_id)}
        invalid_ids = _unique([i for i in requested_ids if i not in members])
        if invalid_ids:
            logger.warning("rejected bulk attendance for class %s: foreign students %s", class_id, invalid_ids)
            raise InvalidMembershipError(class_id, invalid_ids)

        repeated = _unique([i for i in requested_ids if requested_ids.count(i) > 1])
        if repeated:
            raise ConflictError(f"Students {repeated} appear more than once in the same request")

        existing = self._attendance.list_for_enrollments_on_date(requested_ids, attendance_date)
        if existing:
            already = _unique([e.enrollment_id for e in existing])
            logger.warning("rejected bulk attendance: students %s already recorded on %s", already, attendance_date)
            raise ConflictError(f"Attendance already recorded for students {already} on {attendance_date}")

        events = list(
            self._attendance.insert_events(
                [
                    NewAttendanceEvent(
                        enrollment_id=e.enrollment_id,
                        class_id=class_id,
                        attendance_date=attendance_date,
                        status=e.status,
                        recorded_by=recorded_by,
                        note=e.note,
                    )
                    for e in entries
                ]
            )
        )
        logger.info(
            "recorded %d attendance events for class %s on %s by teacher %s",
            len(events),
            class_id,
            attendance_date,
            recorded_by,
        )
        return events

    @staticmethod
    def _normalize_entry(entry: BulkAttendanceEntry) -> BulkAttendanceEntry:
        return BulkAttendanceEntry(
            enrollment_id=require_int(entry.enrollment_id, "student_id"),
            status=parse_status(entry.status),
            note=normalize_note(entry.note),
        )


def _unique(ids: Sequence[int]) -> list[int]:
    seen: dict[int, None] = {}
    for i in ids:
        seen.setdefault(i, None)
    return list(seen)
