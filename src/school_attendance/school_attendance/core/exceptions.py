from __future__ import annotations

from typing import Iterable, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"

    def details(self) -> dict:
        return {}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"


class NotFoundError(DomainError):
    """Raised when a referenced user, class or enrollment does not exist."""

    kind = "NotFound"

    def __init__(self, entity: str, entity_id: object, message: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} with id {entity_id} not found")

    def details(self) -> dict:
        return {"entity": self.entity, "id": self.entity_id}


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "PermissionDenied"


class PermissionDeniedError(AuthorizationError):
    """Raised when the recorder does not have the role the operation requires."""


class ConflictError(DomainError):
    """Raised when a uniqueness rule would be broken."""

    kind = "Conflict"


class InvalidMembershipError(DomainError):
    """Raised when enrollments do not belong to the class named in the request."""

    kind = "InvalidMembership"

    def __init__(self, class_id: int, enrollment_ids: Iterable[int]):
        self.class_id = int(class_id)
        self.enrollment_ids = [int(i) for i in enrollment_ids]
        joined = ", ".join(str(i) for i in self.enrollment_ids)
        super().__init__(f"Students with ids [{joined}] not found in class {self.class_id}")

    def details(self) -> dict:
        return {"class_id": self.class_id, "enrollment_ids": list(self.enrollment_ids)}
