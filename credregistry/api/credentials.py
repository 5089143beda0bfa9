"""Credential lifecycle, sharing and query endpoints.

- POST  /v1/credentials                issue (token)
- GET   /v1/credentials                list every credential
- GET   /v1/credentials/{id}           fetch one credential
- PATCH /v1/credentials/{id}/renew     renew (token)
- PATCH /v1/credentials/{id}/revoke    revoke with a reason (token)
- POST  /v1/credentials/{id}/share     grant a recipient access (token)
- GET   /v1/credentials/{id}/shares    grants on one credential (token)
- POST  /v1/credentials/verify         valid credential for a student
                                       at an institution, if any
- POST  /v1/credentials/search         filter by course/degree/year

Engine errors propagate as RegistryError and are turned into responses by
the handler registered in main.py.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from credregistry.api.dependencies import require_token
from credregistry.models.credential import Credential, CredentialShare
from credregistry.services.registry import Registry, get_registry

router = APIRouter(prefix="/v1/credentials", tags=["credentials"])


class CredentialIssueIn(BaseModel):
    student_id: str
    institution_id: str
    course: str = ""
    degree: str = ""
    graduation_year: int | None = None


class CredentialRevokeIn(BaseModel):
    reason: str = ""


class CredentialShareIn(BaseModel):
    recipient_id: str
    expiration_date: int | None = None
    permissions: list[str] = []


class CredentialVerifyIn(BaseModel):
    student_id: str
    institution_id: str


class CredentialSearchIn(BaseModel):
    course: str | None = None
    degree: str | None = None
    graduation_year: int | None = None


class CredentialOut(BaseModel):
    id: str
    student_id: str
    institution_id: str
    course: str
    degree: str
    graduation_year: int | None
    issued_at: int
    expiration_date: int
    renewal_count: int
    revoked: bool

    @classmethod
    def of(cls, c: Credential) -> CredentialOut:
        return cls(
            id=c.id,
            student_id=c.student_id,
            institution_id=c.institution_id,
            course=c.course,
            degree=c.degree,
            graduation_year=c.graduation_year,
            issued_at=c.issued_at,
            expiration_date=c.expiration_date,
            renewal_count=c.renewal_count,
            revoked=c.revoked,
        )


class CredentialShareOut(BaseModel):
    id: str
    credential_id: str
    recipient_id: str
    expiration_date: int | None
    permissions: list[str]

    @classmethod
    def of(cls, s: CredentialShare) -> CredentialShareOut:
        return cls(
            id=s.id,
            credential_id=s.credential_id,
            recipient_id=s.recipient_id,
            expiration_date=s.expiration_date,
            permissions=list(s.permissions),
        )


@router.post(
    "",
    response_model=CredentialOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_token)],
)
def issue_credential(
    body: CredentialIssueIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> CredentialOut:
    credential = reg.lifecycle.issue(
        student_id=body.student_id,
        institution_id=body.institution_id,
        course=body.course,
        degree=body.degree,
        graduation_year=body.graduation_year,
    )
    return CredentialOut.of(credential)


@router.get("", response_model=list[CredentialOut])
def list_credentials(
    reg: Annotated[Registry, Depends(get_registry)],
) -> list[CredentialOut]:
    return [CredentialOut.of(c) for c in reg.queries.list_all()]


@router.post("/verify", response_model=CredentialOut)
def verify_credential(
    body: CredentialVerifyIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> CredentialOut:
    credential = reg.queries.verify(
        student_id=body.student_id, institution_id=body.institution_id
    )
    return CredentialOut.of(credential)


@router.post("/search", response_model=list[CredentialOut])
def search_credentials(
    body: CredentialSearchIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> list[CredentialOut]:
    results = reg.queries.search(
        course=body.course, degree=body.degree, graduation_year=body.graduation_year
    )
    return [CredentialOut.of(c) for c in results]


@router.get("/{credential_id}", response_model=CredentialOut)
def get_credential(
    credential_id: str,
    reg: Annotated[Registry, Depends(get_registry)],
) -> CredentialOut:
    return CredentialOut.of(reg.lifecycle.get(credential_id))


@router.patch(
    "/{credential_id}/renew",
    response_model=CredentialOut,
    dependencies=[Depends(require_token)],
)
def renew_credential(
    credential_id: str,
    reg: Annotated[Registry, Depends(get_registry)],
) -> CredentialOut:
    return CredentialOut.of(reg.lifecycle.renew(credential_id))


@router.patch(
    "/{credential_id}/revoke",
    response_model=CredentialOut,
    dependencies=[Depends(require_token)],
)
def revoke_credential(
    credential_id: str,
    body: CredentialRevokeIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> CredentialOut:
    return CredentialOut.of(reg.lifecycle.revoke(credential_id, body.reason))


@router.post(
    "/{credential_id}/share",
    response_model=CredentialShareOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_token)],
)
def share_credential(
    credential_id: str,
    body: CredentialShareIn,
    reg: Annotated[Registry, Depends(get_registry)],
) -> CredentialShareOut:
    grant = reg.sharing.share(
        credential_id,
        recipient_id=body.recipient_id,
        expiration_date=body.expiration_date,
        permissions=body.permissions,
    )
    return CredentialShareOut.of(grant)


@router.get(
    "/{credential_id}/shares",
    response_model=list[CredentialShareOut],
    dependencies=[Depends(require_token)],
)
def list_credential_shares(
    credential_id: str,
    reg: Annotated[Registry, Depends(get_registry)],
) -> list[CredentialShareOut]:
    reg.lifecycle.get(credential_id)
    return [CredentialShareOut.of(s) for s in reg.sharing.list_shares(credential_id)]
