from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a teaching group (e.g. "X IPA 1", grade "10")."""

    class_id: int
    name: str
    grade: str
    created_at: datetime
