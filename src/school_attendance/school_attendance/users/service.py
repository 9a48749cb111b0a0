from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import parse_role, require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage student and teacher accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(self, *, name: str, email: str, role: Role | str) -> User:
        name = require_non_empty(name, "name")
        email = require_email(email).lower()
        role = parse_role(role)

        if self._users.get_by_email(email):
            logger.warning("rejected user creation: email %s already registered", email)
            raise ConflictError(f"Email {email} is already registered")

        user = self._users.create_user(name=name, email=email, role=role)
        logger.info("created %s user %s (%s)", user.role.value, user.user_id, user.email)
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()
