from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one recorded status for one enrollment on one calendar date.

    ``class_id`` is copied from the enrollment when the event is written and
    never follows later transfers.
    """

    attendance_id: int
    enrollment_id: int
    class_id: int
    attendance_date: date
    status: AttendanceStatus
    recorded_by: int
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class NewAttendanceEvent:
    """Validated row handed to the repository for insertion."""

    enrollment_id: int
    class_id: int
    attendance_date: date
    status: AttendanceStatus
    recorded_by: int
    note: Optional[str] = None


@dataclass(frozen=True)
class BulkAttendanceEntry:
    enrollment_id: int
    status: AttendanceStatus
    note: Optional[str] = None
