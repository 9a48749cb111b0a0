from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.writer import AttendanceWriter
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import EnrollmentService
from .reports.service import AttendanceAggregator
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    classes_repo: ClassRepository
    enrollments_repo: EnrollmentRepository
    attendance_repo: AttendanceRepository

    user_service: UserService
    class_service: ClassService
    enrollment_service: EnrollmentService
    attendance_writer: AttendanceWriter
    attendance_aggregator: AttendanceAggregator


def build_services(
    *,
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    enrollments_repo: EnrollmentRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    """Wire services on top of any repository implementations."""

    return Container(
        users_repo=users_repo,
        classes_repo=classes_repo,
        enrollments_repo=enrollments_repo,
        attendance_repo=attendance_repo,
        user_service=UserService(users_repo),
        class_service=ClassService(classes_repo),
        enrollment_service=EnrollmentService(enrollments_repo, users_repo, classes_repo),
        attendance_writer=AttendanceWriter(attendance_repo, enrollments_repo, classes_repo, users_repo),
        attendance_aggregator=AttendanceAggregator(attendance_repo, enrollments_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
