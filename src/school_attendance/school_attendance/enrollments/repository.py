from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Enrollment, ReportPopulationRow, StudentListing


class EnrollmentRepository(Protocol):
    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def get_by_student_number(self, student_number: str) -> Optional[Enrollment]:
        raise NotImplementedError

    def list_by_class(self, class_id: int) -> Sequence[Enrollment]:
        raise NotImplementedError

    def count(self, *, class_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def create_enrollment(self, *, user_id: int, class_id: int, student_number: str) -> Enrollment:
        raise NotImplementedError

    def list_students_by_class(self, class_id: int) -> Sequence[StudentListing]:
        raise NotImplementedError

    def list_report_population(
        self,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
    ) -> Sequence[ReportPopulationRow]:
        """Enrollments inner-joined to user and class, optionally filtered."""

        raise NotImplementedError
