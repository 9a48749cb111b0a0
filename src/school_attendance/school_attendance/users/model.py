from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a student or teacher account.

    Plain data object, carries no DB access code.
    """

    user_id: int
    name: str
    email: str
    role: Role
    created_at: datetime

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER
