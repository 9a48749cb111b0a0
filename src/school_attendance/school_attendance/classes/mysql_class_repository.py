from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository


def _to_class(row: dict[str, Any]) -> SchoolClass:
    return SchoolClass(
        class_id=int(row["class_id"]),
        name=row["name"],
        grade=row["grade"],
        created_at=row["created_at"],
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT class_id, name, grade, created_at FROM classes WHERE class_id=%s",
                (int(class_id),),
            )
            row = fetchone(cur)
            return _to_class(row) if row else None

    def create_class(self, *, name: str, grade: str) -> SchoolClass:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(name, grade) VALUES(%s,%s)", (name, grade))
            cur.execute(
                "SELECT class_id, name, grade, created_at FROM classes WHERE class_id=%s",
                (int(cur.lastrowid),),
            )
            return _to_class(fetchone(cur))

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name, grade, created_at FROM classes ORDER BY name ASC, class_id ASC")
            return [_to_class(r) for r in fetchall(cur)]
