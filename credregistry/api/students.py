from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from credregistry.models.student import Student
from credregistry.services import students_service
from credregistry.services.registry import Registry, get_registry

router = APIRouter(prefix="/v1/students", tags=["students"])


class StudentCreateIn(BaseModel):
    name: str
    email: str


class StudentOut(BaseModel):
    id: str
    name: str
    email: str
    created_at: int

    @classmethod
    def of(cls, s: Student) -> StudentOut:
        return cls(id=s.id, name=s.name, email=s.email, created_at=s.created_at)


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(
    body: StudentCreateIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> StudentOut:
    student = students_service.create_student(
        reg.students, name=body.name, email=body.email, clock=reg.clock
    )
    return StudentOut.of(student)


@router.get("", response_model=list[StudentOut])
def list_students(
    reg: Annotated[Registry, Depends(get_registry)],
) -> list[StudentOut]:
    return [StudentOut.of(s) for s in students_service.list_students(reg.students)]


@router.get("/{student_id}", response_model=StudentOut)
def get_student(
    student_id: str,
    reg: Annotated[Registry, Depends(get_registry)],
) -> StudentOut:
    return StudentOut.of(students_service.get_student(reg.students, student_id))
