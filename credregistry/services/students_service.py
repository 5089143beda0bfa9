from __future__ import annotations

import logging

from credregistry.core.clock import Clock, now
from credregistry.core.errors import NotFoundError, require_text
from credregistry.models.student import Student
from credregistry.repos.student_repo import StudentRepo

logger = logging.getLogger(__name__)


def create_student(
    repo: StudentRepo, *, name: str, email: str, clock: Clock = now
) -> Student:
    name = require_text("name", name)
    email = require_text("email", email)

    student = Student.new(name=name, email=email, created_at=clock())
    repo.add(student)
    logger.info("Created student id=%s email=%s", student.id, student.email)
    return student


def get_student(repo: StudentRepo, student_id: str) -> Student:
    student = repo.get_by_id(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return student


def list_students(repo: StudentRepo) -> list[Student]:
    students = repo.list_all()
    if not students:
        raise NotFoundError("students")
    return students
