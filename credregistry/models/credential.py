from __future__ import annotations

from dataclasses import dataclass, replace

from credregistry.core.ids import new_id

# Five 365-day years; leap days are not counted.
VALIDITY_SECONDS = 5 * 365 * 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class Credential:
    """A student's course/degree record issued by an institution.

    ``expiration_date`` is always the issue (or last renewal) time plus
    VALIDITY_SECONDS.  ``revoked`` only ever goes False -> True and
    ``renewal_count`` only increases.  "Expired" is not stored; it is
    derived from ``expiration_date`` and the current time.
    """

    id: str
    student_id: str
    institution_id: str
    course: str
    degree: str
    graduation_year: int | None
    issued_at: int
    expiration_date: int
    renewal_count: int = 0
    revoked: bool = False

    @staticmethod
    def new(
        *,
        student_id: str,
        institution_id: str,
        course: str,
        degree: str,
        graduation_year: int | None,
        issued_at: int,
    ) -> Credential:
        # graduation_year is recorded only; it does not shift expiry.
        return Credential(
            id=new_id(),
            student_id=student_id,
            institution_id=institution_id,
            course=course,
            degree=degree,
            graduation_year=graduation_year,
            issued_at=issued_at,
            expiration_date=issued_at + VALIDITY_SECONDS,
        )

    def is_expired(self, now: int) -> bool:
        return self.expiration_date < now

    def is_valid(self, now: int) -> bool:
        return not self.revoked and self.expiration_date > now

    def renewed(self, now: int) -> Credential:
        return replace(
            self,
            expiration_date=now + VALIDITY_SECONDS,
            renewal_count=self.renewal_count + 1,
        )

    def revoked_copy(self) -> Credential:
        return replace(self, revoked=True)


@dataclass(frozen=True, slots=True)
class CredentialShare:
    """Time-bounded, permission-scoped grant on a credential.

    The referenced credential is only checked for existence when the
    share is created; later revocation does not touch existing shares.
    """

    id: str
    credential_id: str
    recipient_id: str
    expiration_date: int | None
    permissions: tuple[str, ...] = ()

    @staticmethod
    def new(
        *,
        credential_id: str,
        recipient_id: str,
        expiration_date: int | None,
        permissions: tuple[str, ...] = (),
    ) -> CredentialShare:
        return CredentialShare(
            id=new_id(),
            credential_id=credential_id,
            recipient_id=recipient_id,
            expiration_date=expiration_date,
            permissions=permissions,
        )
