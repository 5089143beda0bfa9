from __future__ import annotations

from typing import Protocol

from credregistry.models.student import Student


class StudentRepo(Protocol):
    def get_by_id(self, student_id: str) -> Student | None: ...
    def add(self, student: Student) -> None: ...
    def list_all(self) -> list[Student]: ...


class InMemoryStudentRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, Student] = {}

    def get_by_id(self, student_id: str) -> Student | None:
        return self._by_id.get(student_id)

    def add(self, student: Student) -> None:
        if student.id in self._by_id:
            raise ValueError("student id already exists")
        self._by_id[student.id] = student

    def list_all(self) -> list[Student]:
        return list(self._by_id.values())
