from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from .model import SchoolClass
from .repository import ClassRepository

logger = logging.getLogger(__name__)


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def create_class(self, *, name: str, grade: str) -> SchoolClass:
        name = require_non_empty(name, "name")
        grade = require_non_empty(grade, "grade")

        created = self._classes.create_class(name=name, grade=grade)
        logger.info("created class %s (%s, grade %s)", created.class_id, created.name, created.grade)
        return created

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()
