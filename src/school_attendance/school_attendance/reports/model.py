from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class SnapshotStats:
    """Dashboard counts for a single date."""

    total_students: int
    present: int
    sick: int
    excused: int
    absent: int
    attendance_rate: float

    @classmethod
    def empty(cls) -> "SnapshotStats":
        return cls(total_students=0, present=0, sick=0, excused=0, absent=0, attendance_rate=0.0)


@dataclass(frozen=True)
class ReportFilters:
    class_id: Optional[int] = None
    enrollment_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class StudentAttendanceReport:
    """Per-student totals over the filtered date range.

    ``total_days`` counts recorded events, not calendar days.
    """

    student_id: int
    student_name: str
    student_number: str
    class_name: str
    total_days: int
    present_days: int
    sick_days: int
    excused_days: int
    absent_days: int
    attendance_rate: float
