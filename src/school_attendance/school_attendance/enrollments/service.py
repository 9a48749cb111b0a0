from __future__ import annotations

import logging
from typing import Sequence

from ..classes.repository import ClassRepository
from ..common.validators import require_int, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Enrollment, StudentListing
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Use case: enroll student users into classes and list class rosters."""

    def __init__(self, enrollments: EnrollmentRepository, users: UserRepository, classes: ClassRepository):
        self._enrollments = enrollments
        self._users = users
        self._classes = classes

    def enroll_student(self, *, user_id: int, class_id: int, student_number: str) -> Enrollment:
        user_id = require_int(user_id, "user_id")
        class_id = require_int(class_id, "class_id")
        student_number = require_non_empty(student_number, "student_number")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        if user.role != Role.STUDENT:
            raise ValidationError(f"User {user_id} must have role {Role.STUDENT.value!r} to be enrolled")

        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class", class_id)

        if self._enrollments.get_by_student_number(student_number):
            logger.warning("rejected enrollment: student number %s already in use", student_number)
            raise ConflictError(f"Student number {student_number} is already in use")

        enrollment = self._enrollments.create_enrollment(
            user_id=user_id,
            class_id=class_id,
            student_number=student_number,
        )
        logger.info(
            "enrolled user %s into class %s as %s (enrollment %s)",
            user_id,
            class_id,
            student_number,
            enrollment.enrollment_id,
        )
        return enrollment

    def get_students_by_class(self, class_id: int) -> Sequence[StudentListing]:
        return self._enrollments.list_students_by_class(require_int(class_id, "class_id"))
