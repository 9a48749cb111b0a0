from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from src.school_attendance.school_attendance.attendance.model import NewAttendanceEvent
from src.school_attendance.school_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.core.exceptions import ConflictError
from src.school_attendance.school_attendance.database.bootstrap import iter_sql_statements
from src.school_attendance.school_attendance.database.mysql_base import normalize_mysql_date


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None
        self._result = []

    def execute(self, sql, params=()):
        self._conn.statements.append((" ".join(sql.split()), params))
        if sql.strip().upper().startswith("INSERT"):
            if self._conn.fail_on_insert is not None and self._conn.inserts == self._conn.fail_on_insert:
                raise mysql.connector.IntegrityError(msg="Duplicate entry '1-2026-02-02'", errno=1062)
            self._conn.inserts += 1
            self.lastrowid = 100 + self._conn.inserts
            self._conn.pending[self.lastrowid] = params
        else:
            # SELECT ... WHERE attendance_id IN (...) after the inserts; return rows shuffled.
            rows = []
            for attendance_id in reversed(params):
                enrollment_id, class_id, on, status, recorded_by, note = self._conn.pending[attendance_id]
                rows.append(
                    {
                        "attendance_id": attendance_id,
                        "enrollment_id": enrollment_id,
                        "class_id": class_id,
                        "attendance_date": on.isoformat(),
                        "status": status,
                        "recorded_by": recorded_by,
                        "note": note,
                        "created_at": datetime(2026, 2, 2, 7, 30),
                    }
                )
            self._result = rows

    def fetchall(self):
        return self._result

    def fetchone(self):
        return self._result[0] if self._result else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, fail_on_insert=None):
        self.fail_on_insert = fail_on_insert
        self.inserts = 0
        self.pending = {}
        self.statements = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self, *, with_database=True):
        return self.conn


def _rows(*enrollment_ids):
    return [
        NewAttendanceEvent(
            enrollment_id=i,
            class_id=7,
            attendance_date=date(2026, 2, 2),
            status=AttendanceStatus.PRESENT,
            recorded_by=1,
        )
        for i in enrollment_ids
    ]


def test_insert_events_commits_once_and_keeps_input_order():
    conn = FakeConnection()
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    events = repo.insert_events(_rows(3, 1, 2))

    assert [e.enrollment_id for e in events] == [3, 1, 2]
    assert [e.attendance_id for e in events] == [101, 102, 103]
    assert events[0].attendance_date == date(2026, 2, 2)
    assert conn.committed and not conn.rolled_back and conn.closed


def test_duplicate_key_rolls_back_whole_batch():
    conn = FakeConnection(fail_on_insert=1)
    repo = MySQLAttendanceRepository(FakeConnFactory(conn))

    with pytest.raises(ConflictError):
        repo.insert_events(_rows(1, 2, 3))

    assert conn.rolled_back
    assert not conn.committed


def test_insert_events_rejects_empty_batch():
    repo = MySQLAttendanceRepository(FakeConnFactory(FakeConnection()))

    with pytest.raises(ValueError):
        repo.insert_events([])


def test_normalize_mysql_date_variants():
    assert normalize_mysql_date(date(2026, 2, 2)) == date(2026, 2, 2)
    assert normalize_mysql_date(datetime(2026, 2, 2, 9, 0)) == date(2026, 2, 2)
    assert normalize_mysql_date("2026-02-02") == date(2026, 2, 2)
    assert normalize_mysql_date(b"2026-02-02") == date(2026, 2, 2)


def test_sql_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT 1;\nSELECT \"x;y\""

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1", 'SELECT "x;y"']
