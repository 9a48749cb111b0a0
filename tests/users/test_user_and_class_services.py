from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import ConflictError, ValidationError


def test_create_user_normalizes_email(container):
    user = container.user_service.create_user(name=" Ibu Sari ", email="Sari@School.Test", role="teacher")

    assert user.name == "Ibu Sari"
    assert user.email == "sari@school.test"
    assert user.role == Role.TEACHER
    assert user.is_teacher


def test_create_user_duplicate_email_conflicts(container):
    container.user_service.create_user(name="A", email="a@school.test", role=Role.STUDENT)

    with pytest.raises(ConflictError):
        container.user_service.create_user(name="B", email="A@school.test", role=Role.STUDENT)


@pytest.mark.parametrize(
    "name, email, role",
    [
        ("", "a@school.test", "student"),
        ("A", "not-an-email", "student"),
        ("A", "a@school.test", "admin"),
    ],
)
def test_create_user_rejects_bad_input(container, name, email, role):
    with pytest.raises(ValidationError):
        container.user_service.create_user(name=name, email=email, role=role)


def test_list_users_in_id_order(container):
    container.user_service.create_user(name="B", email="b@school.test", role=Role.STUDENT)
    container.user_service.create_user(name="A", email="a@school.test", role=Role.TEACHER)

    assert [u.name for u in container.user_service.list_users()] == ["B", "A"]


def test_create_and_list_classes(container):
    container.class_service.create_class(name="XI IPS 2", grade="11")
    created = container.class_service.create_class(name=" X IPA 1 ", grade="10")

    assert created.name == "X IPA 1"
    assert [c.name for c in container.class_service.list_classes()] == ["X IPA 1", "XI IPS 2"]


def test_create_class_requires_grade(container):
    with pytest.raises(ValidationError):
        container.class_service.create_class(name="X IPA 1", grade="  ")
