from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from credregistry.models.institution import Institution
from credregistry.services import institutions_service
from credregistry.services.registry import Registry, get_registry

router = APIRouter(prefix="/v1/institutions", tags=["institutions"])


class InstitutionCreateIn(BaseModel):
    name: str
    address: str


class InstitutionOut(BaseModel):
    id: str
    name: str
    address: str
    created_at: int

    @classmethod
    def of(cls, i: Institution) -> InstitutionOut:
        return cls(id=i.id, name=i.name, address=i.address, created_at=i.created_at)


@router.post("", response_model=InstitutionOut, status_code=status.HTTP_201_CREATED)
def create_institution(
    body: InstitutionCreateIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> InstitutionOut:
    institution = institutions_service.create_institution(
        reg.institutions, name=body.name, address=body.address, clock=reg.clock
    )
    return InstitutionOut.of(institution)


@router.get("", response_model=list[InstitutionOut])
def list_institutions(
    reg: Annotated[Registry, Depends(get_registry)],
) -> list[InstitutionOut]:
    return [
        InstitutionOut.of(i)
        for i in institutions_service.list_institutions(reg.institutions)
    ]


@router.get("/{institution_id}", response_model=InstitutionOut)
def get_institution(
    institution_id: str,
    reg: Annotated[Registry, Depends(get_registry)],
) -> InstitutionOut:
    return InstitutionOut.of(
        institutions_service.get_institution(reg.institutions, institution_id)
    )
