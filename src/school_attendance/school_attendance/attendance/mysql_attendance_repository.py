from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, Sequence

import mysql.connector

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, placeholders
from .model import AttendanceEvent, NewAttendanceEvent
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, enrollment_id, class_id, attendance_date, status, recorded_by, note, created_at"


def _to_event(row: dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        attendance_id=int(row["attendance_id"]),
        enrollment_id=int(row["enrollment_id"]),
        class_id=int(row["class_id"]),
        attendance_date=normalize_mysql_date(row["attendance_date"]),
        status=AttendanceStatus(row["status"]),
        recorded_by=int(row["recorded_by"]),
        note=row.get("note"),
        created_at=row["created_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_events(self, rows: Sequence[NewAttendanceEvent]) -> Sequence[AttendanceEvent]:
        if not rows:
            raise ValueError("insert_events requires at least one row")

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                ids: list[int] = []
                for row in rows:
                    cur.execute(
                        """
                        INSERT INTO attendance_events(enrollment_id, class_id, attendance_date, status, recorded_by, note)
                        VALUES(%s,%s,%s,%s,%s,%s)
                        """,
                        (
                            row.enrollment_id,
                            row.class_id,
                            row.attendance_date,
                            row.status.value,
                            row.recorded_by,
                            row.note,
                        ),
                    )
                    ids.append(int(cur.lastrowid))

                cur.execute(
                    f"SELECT {_COLUMNS} FROM attendance_events WHERE attendance_id IN ({placeholders(len(ids))})",
                    tuple(ids),
                )
                by_id = {e.attendance_id: e for e in (_to_event(r) for r in fetchall(cur))}
                return [by_id[i] for i in ids]
        except mysql.connector.IntegrityError as e:
            if e.errno == MYSQL_DUPLICATE_KEY_ERRNO:
                raise ConflictError(f"Attendance already recorded: {e.msg}") from e
            raise

    def query_events(
        self,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses: list[str] = []
        params: list[object] = []

        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        if enrollment_id is not None:
            clauses.append("enrollment_id=%s")
            params.append(int(enrollment_id))
        if on_date is not None:
            clauses.append("attendance_date=%s")
            params.append(on_date)
        if start_date is not None:
            clauses.append("attendance_date>=%s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("attendance_date<=%s")
            params.append(end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_events {where} ORDER BY attendance_id ASC",
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def get_for_enrollment_and_date(self, enrollment_id: int, on_date: date) -> Optional[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_events WHERE enrollment_id=%s AND attendance_date=%s",
                (int(enrollment_id), on_date),
            )
            row = fetchone(cur)
            return _to_event(row) if row else None

    def list_for_enrollments_on_date(self, enrollment_ids: Iterable[int], on_date: date) -> Sequence[AttendanceEvent]:
        ids = [int(i) for i in enrollment_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_events
                WHERE attendance_date=%s AND enrollment_id IN ({placeholders(len(ids))})
                ORDER BY attendance_id ASC
                """,
                (on_date, *ids),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def count_by_status(self, *, on_date: date, class_id: Optional[int] = None) -> dict[AttendanceStatus, int]:
        clauses = ["attendance_date=%s"]
        params: list[object] = [on_date]
        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT status, COUNT(*) AS total
                FROM attendance_events
                WHERE {' AND '.join(clauses)}
                GROUP BY status
                """,
                tuple(params),
            )
            return {AttendanceStatus(r["status"]): int(r["total"]) for r in fetchall(cur)}
