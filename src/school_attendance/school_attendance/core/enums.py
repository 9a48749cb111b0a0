from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for enrollment and recording permissions."""

    STUDENT = "student"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Closed set of statuses stored for an attendance event."""

    PRESENT = "PRESENT"
    SICK = "SICK"
    EXCUSED = "EXCUSED"
    ABSENT = "ABSENT"
