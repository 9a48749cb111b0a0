from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceEvent, NewAttendanceEvent
from src.school_attendance.school_attendance.classes.model import SchoolClass
from src.school_attendance.school_attendance.container import Container, build_services
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.core.exceptions import ConflictError
from src.school_attendance.school_attendance.enrollments.model import (
    Enrollment,
    ReportPopulationRow,
    StudentListing,
)
from src.school_attendance.school_attendance.users.model import User

CREATED_AT = datetime(2026, 1, 5, 7, 0, 0)


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, role: Role) -> User:
        user = User(user_id=len(self.users) + 1, name=name, email=email, role=role, created_at=CREATED_AT)
        self.users[user.user_id] = user
        return user

    def list_all(self):
        return sorted(self.users.values(), key=lambda u: u.user_id)


class InMemoryClasses:
    def __init__(self):
        self.classes: dict[int, SchoolClass] = {}

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        return self.classes.get(int(class_id))

    def create_class(self, *, name: str, grade: str) -> SchoolClass:
        created = SchoolClass(class_id=len(self.classes) + 1, name=name, grade=grade, created_at=CREATED_AT)
        self.classes[created.class_id] = created
        return created

    def list_all(self):
        return sorted(self.classes.values(), key=lambda c: (c.name, c.class_id))


class InMemoryEnrollments:
    def __init__(self, users: InMemoryUsers, classes: InMemoryClasses):
        self._users = users
        self._classes = classes
        self.enrollments: dict[int, Enrollment] = {}

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        return self.enrollments.get(int(enrollment_id))

    def get_by_student_number(self, student_number: str) -> Optional[Enrollment]:
        return next((e for e in self.enrollments.values() if e.student_number == student_number), None)

    def list_by_class(self, class_id: int):
        return [e for e in self.enrollments.values() if e.class_id == class_id]

    def count(self, *, class_id: Optional[int] = None) -> int:
        if class_id is None:
            return len(self.enrollments)
        return len(self.list_by_class(class_id))

    def create_enrollment(self, *, user_id: int, class_id: int, student_number: str) -> Enrollment:
        enrollment = Enrollment(
            enrollment_id=len(self.enrollments) + 1,
            user_id=user_id,
            class_id=class_id,
            student_number=student_number,
            created_at=CREATED_AT,
        )
        self.enrollments[enrollment.enrollment_id] = enrollment
        return enrollment

    def transfer(self, enrollment_id: int, class_id: int) -> None:
        old = self.enrollments[enrollment_id]
        self.enrollments[enrollment_id] = Enrollment(
            enrollment_id=old.enrollment_id,
            user_id=old.user_id,
            class_id=class_id,
            student_number=old.student_number,
            created_at=old.created_at,
        )

    def list_students_by_class(self, class_id: int):
        rows = []
        for e in self.list_by_class(class_id):
            user = self._users.users[e.user_id]
            rows.append(
                StudentListing(
                    enrollment_id=e.enrollment_id,
                    user_id=e.user_id,
                    class_id=e.class_id,
                    student_number=e.student_number,
                    name=user.name,
                    email=user.email,
                    created_at=e.created_at,
                )
            )
        return sorted(rows, key=lambda r: (r.name, r.enrollment_id))

    def list_report_population(self, *, class_id=None, enrollment_id=None):
        rows = []
        for e in sorted(self.enrollments.values(), key=lambda x: x.enrollment_id):
            if class_id is not None and e.class_id != class_id:
                continue
            if enrollment_id is not None and e.enrollment_id != enrollment_id:
                continue
            rows.append(
                ReportPopulationRow(
                    enrollment_id=e.enrollment_id,
                    student_name=self._users.users[e.user_id].name,
                    student_number=e.student_number,
                    class_id=e.class_id,
                    class_name=self._classes.classes[e.class_id].name,
                )
            )
        return rows


class InMemoryAttendance:
    """Mirrors the storage UNIQUE(enrollment_id, attendance_date) key and batch atomicity."""

    def __init__(self):
        self.events: dict[int, AttendanceEvent] = {}
        self.insert_calls = 0

    def insert_events(self, rows):
        self.insert_calls += 1
        if not rows:
            raise ValueError("insert_events requires at least one row")

        taken = {(e.enrollment_id, e.attendance_date) for e in self.events.values()}
        for row in rows:
            key = (row.enrollment_id, row.attendance_date)
            if key in taken:
                raise ConflictError(f"Duplicate entry {key}")
            taken.add(key)

        stored = []
        for row in rows:
            event = AttendanceEvent(
                attendance_id=len(self.events) + 1,
                enrollment_id=row.enrollment_id,
                class_id=row.class_id,
                attendance_date=row.attendance_date,
                status=row.status,
                recorded_by=row.recorded_by,
                note=row.note,
                created_at=CREATED_AT,
            )
            self.events[event.attendance_id] = event
            stored.append(event)
        return stored

    def query_events(self, *, class_id=None, enrollment_id=None, on_date=None, start_date=None, end_date=None):
        out = []
        for e in sorted(self.events.values(), key=lambda x: x.attendance_id):
            if class_id is not None and e.class_id != class_id:
                continue
            if enrollment_id is not None and e.enrollment_id != enrollment_id:
                continue
            if on_date is not None and e.attendance_date != on_date:
                continue
            if start_date is not None and e.attendance_date < start_date:
                continue
            if end_date is not None and e.attendance_date > end_date:
                continue
            out.append(e)
        return out

    def get_for_enrollment_and_date(self, enrollment_id: int, on_date: date):
        found = self.query_events(enrollment_id=enrollment_id, on_date=on_date)
        return found[0] if found else None

    def list_for_enrollments_on_date(self, enrollment_ids: Iterable[int], on_date: date):
        ids = set(enrollment_ids)
        return [e for e in self.query_events(on_date=on_date) if e.enrollment_id in ids]

    def count_by_status(self, *, on_date: date, class_id=None):
        counts: dict[AttendanceStatus, int] = {}
        for e in self.query_events(on_date=on_date, class_id=class_id):
            counts[e.status] = counts.get(e.status, 0) + 1
        return counts

    def seed(self, *, enrollment_id: int, class_id: int, on: date, status: AttendanceStatus, recorded_by: int = 1):
        return self.insert_events(
            [
                NewAttendanceEvent(
                    enrollment_id=enrollment_id,
                    class_id=class_id,
                    attendance_date=on,
                    status=status,
                    recorded_by=recorded_by,
                )
            ]
        )[0]


@dataclass
class School:
    """Ids of the seeded fixture data."""

    teacher_id: int
    student_user_id: int
    class_a: int
    class_b: int
    class_a_students: list[int] = field(default_factory=list)
    class_b_students: list[int] = field(default_factory=list)


@pytest.fixture
def today() -> date:
    return date(2026, 2, 2)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def classes_repo() -> InMemoryClasses:
    return InMemoryClasses()


@pytest.fixture
def enrollments_repo(users_repo, classes_repo) -> InMemoryEnrollments:
    return InMemoryEnrollments(users_repo, classes_repo)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(users_repo, classes_repo, enrollments_repo, attendance_repo) -> Container:
    return build_services(
        users_repo=users_repo,
        classes_repo=classes_repo,
        enrollments_repo=enrollments_repo,
        attendance_repo=attendance_repo,
    )


@pytest.fixture
def school(users_repo, classes_repo, enrollments_repo) -> School:
    """One teacher, class A with 4 students (Dewi, Andi, Citra, Budi), class B with 1 (Eko)."""

    teacher = users_repo.create_user(name="Ibu Sari", email="sari@school.test", role=Role.TEACHER)
    class_a = classes_repo.create_class(name="X IPA 1", grade="10")
    class_b = classes_repo.create_class(name="XI IPS 2", grade="11")

    def enroll(name: str, class_id: int) -> int:
        user = users_repo.create_user(name=name, email=f"{name.lower()}@school.test", role=Role.STUDENT)
        number = f"S-{len(enrollments_repo.enrollments) + 1:03d}"
        return enrollments_repo.create_enrollment(user_id=user.user_id, class_id=class_id, student_number=number).enrollment_id

    a_students = [enroll(n, class_a.class_id) for n in ("Dewi", "Andi", "Citra", "Budi")]
    b_students = [enroll("Eko", class_b.class_id)]
    first_student = enrollments_repo.get_by_id(a_students[0])

    return School(
        teacher_id=teacher.user_id,
        student_user_id=first_student.user_id,
        class_a=class_a.class_id,
        class_b=class_b.class_id,
        class_a_students=a_students,
        class_b_students=b_students,
    )
