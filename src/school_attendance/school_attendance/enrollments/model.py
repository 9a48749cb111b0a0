from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Enrollment:
    """Domain entity: links a student user to exactly one class.

    ``student_number`` is the school-assigned id, unique across the system.
    """

    enrollment_id: int
    user_id: int
    class_id: int
    student_number: str
    created_at: datetime


@dataclass(frozen=True)
class StudentListing:
    """Read-model for class rosters (enrollment + user identity)."""

    enrollment_id: int
    user_id: int
    class_id: int
    student_number: str
    name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class ReportPopulationRow:
    """Read-model: one enrollment joined to its student and class names."""

    enrollment_id: int
    student_name: str
    student_number: str
    class_id: int
    class_name: str
