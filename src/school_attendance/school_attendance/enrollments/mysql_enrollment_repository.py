from __future__ import annotations

from typing import Any, Optional, Sequence

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Enrollment, ReportPopulationRow, StudentListing
from .repository import EnrollmentRepository

_COLUMNS = "enrollment_id, user_id, class_id, student_number, created_at"


def _to_enrollment(row: dict[str, Any]) -> Enrollment:
    return Enrollment(
        enrollment_id=int(row["enrollment_id"]),
        user_id=int(row["user_id"]),
        class_id=int(row["class_id"]),
        student_number=row["student_number"],
        created_at=row["created_at"],
    )


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, enrollment_id: int) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM enrollments WHERE enrollment_id=%s", (int(enrollment_id),))
            row = fetchone(cur)
            return _to_enrollment(row) if row else None

    def get_by_student_number(self, student_number: str) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM enrollments WHERE student_number=%s", (student_number,))
            row = fetchone(cur)
            return _to_enrollment(row) if row else None

    def list_by_class(self, class_id: int) -> Sequence[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM enrollments WHERE class_id=%s ORDER BY enrollment_id ASC",
                (int(class_id),),
            )
            return [_to_enrollment(r) for r in fetchall(cur)]

    def count(self, *, class_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if class_id is None:
                cur.execute("SELECT COUNT(*) AS total FROM enrollments")
            else:
                cur.execute("SELECT COUNT(*) AS total FROM enrollments WHERE class_id=%s", (int(class_id),))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def create_enrollment(self, *, user_id: int, class_id: int, student_number: str) -> Enrollment:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO enrollments(user_id, class_id, student_number) VALUES(%s,%s,%s)",
                    (int(user_id), int(class_id), student_number),
                )
                cur.execute(f"SELECT {_COLUMNS} FROM enrollments WHERE enrollment_id=%s", (int(cur.lastrowid),))
                return _to_enrollment(fetchone(cur))
        except mysql.connector.IntegrityError as e:
            if e.errno == MYSQL_DUPLICATE_KEY_ERRNO:
                raise ConflictError(f"Student number {student_number} is already in use") from e
            raise

    def list_students_by_class(self, class_id: int) -> Sequence[StudentListing]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.enrollment_id, e.user_id, e.class_id, e.student_number, e.created_at,
                       u.name, u.email
                FROM enrollments e
                JOIN users u ON u.user_id = e.user_id
                WHERE e.class_id=%s
                ORDER BY u.name ASC, e.enrollment_id ASC
                """,
                (int(class_id),),
            )
            return [
                StudentListing(
                    enrollment_id=int(r["enrollment_id"]),
                    user_id=int(r["user_id"]),
                    class_id=int(r["class_id"]),
                    student_number=r["student_number"],
                    name=r["name"],
                    email=r["email"],
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def list_report_population(
        self,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
    ) -> Sequence[ReportPopulationRow]:
        clauses: list[str] = []
        params: list[object] = []

        if class_id is not None:
            clauses.append("e.class_id=%s")
            params.append(int(class_id))
        if enrollment_id is not None:
            clauses.append("e.enrollment_id=%s")
            params.append(int(enrollment_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT e.enrollment_id, e.student_number, e.class_id,
                       u.name AS student_name,
                       c.name AS class_name
                FROM enrollments e
                JOIN users u ON u.user_id = e.user_id
                JOIN classes c ON c.class_id = e.class_id
                {where}
                ORDER BY e.enrollment_id ASC
                """,
                tuple(params),
            )
            return [
                ReportPopulationRow(
                    enrollment_id=int(r["enrollment_id"]),
                    student_name=r["student_name"],
                    student_number=r["student_number"],
                    class_id=int(r["class_id"]),
                    class_name=r["class_name"],
                )
                for r in fetchall(cur)
            ]
