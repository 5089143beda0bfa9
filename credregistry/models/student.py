from __future__ import annotations

from dataclasses import dataclass

from credregistry.core.ids import new_id


@dataclass(frozen=True, slots=True)
class Student:
    id: str
    name: str
    email: str
    created_at: int

    @staticmethod
    def new(*, name: str, email: str, created_at: int) -> Student:
        return Student(id=new_id(), name=name, email=email, created_at=created_at)
