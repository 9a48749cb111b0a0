from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEvent, NewAttendanceEvent


class AttendanceRepository(Protocol):
    def insert_events(self, rows: Sequence[NewAttendanceEvent]) -> Sequence[AttendanceEvent]:
        """Insert a non-empty batch atomically; return stored rows in input order.

        Raises ConflictError when the storage-level (enrollment, date)
        uniqueness constraint rejects any row. Nothing is committed then.
        """

        raise NotImplementedError

    def query_events(
        self,
        *,
        class_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def get_for_enrollment_and_date(self, enrollment_id: int, on_date: date) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def list_for_enrollments_on_date(self, enrollment_ids: Iterable[int], on_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def count_by_status(self, *, on_date: date, class_id: Optional[int] = None) -> dict[AttendanceStatus, int]:
        raise NotImplementedError
