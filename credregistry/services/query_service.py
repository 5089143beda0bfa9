"""Read-side queries over the credential store: verify, search, list.

All three scan the whole collection in the store's natural (insertion)
order; there are no secondary indexes.  An empty result is reported as
NotFoundError rather than an empty list, the contract clients of the
registry already depend on.
"""

from __future__ import annotations

import logging

from credregistry.core.clock import Clock, now
from credregistry.core.errors import NotFoundError
from credregistry.core.metrics import CREDENTIAL_OPERATIONS
from credregistry.models.credential import Credential
from credregistry.repos.credential_repo import CredentialRepo

logger = logging.getLogger(__name__)


class QueryService:
    def __init__(self, *, credentials: CredentialRepo, clock: Clock = now) -> None:
        self._credentials = credentials
        self._clock = clock

    def verify(self, *, student_id: str, institution_id: str) -> Credential:
        """First credential for this student/institution pair that is
        neither revoked nor expired."""
        ts = self._clock()
        for credential in self._credentials.list_all():
            if (
                credential.student_id == student_id
                and credential.institution_id == institution_id
                and credential.is_valid(ts)
            ):
                CREDENTIAL_OPERATIONS.labels(operation="verify", result="ok").inc()
                logger.info(
                    "Verified credential id=%s student=%s institution=%s",
                    credential.id,
                    student_id,
                    institution_id,
                    extra={"credential_id": credential.id, "operation": "verify"},
                )
                return credential

        CREDENTIAL_OPERATIONS.labels(operation="verify", result="rejected").inc()
        logger.info(
            "No valid credential for student=%s institution=%s",
            student_id,
            institution_id,
        )
        raise NotFoundError("Credential")

    def search(
        self,
        *,
        course: str | None = None,
        degree: str | None = None,
        graduation_year: int | None = None,
    ) -> list[Credential]:
        """Conjunctive filter; unset (or empty/zero) filters match everything.

        course and degree match by case-sensitive substring, graduation_year
        by equality.
        """
        matches = [
            c
            for c in self._credentials.list_all()
            if (not course or course in c.course)
            and (not degree or degree in c.degree)
            and (not graduation_year or c.graduation_year == graduation_year)
        ]
        if not matches:
            CREDENTIAL_OPERATIONS.labels(operation="search", result="rejected").inc()
            raise NotFoundError("credentials")

        CREDENTIAL_OPERATIONS.labels(operation="search", result="ok").inc()
        logger.debug(
            "Search course=%r degree=%r year=%r matched %d",
            course,
            degree,
            graduation_year,
            len(matches),
        )
        return matches

    def list_all(self) -> list[Credential]:
        credentials = self._credentials.list_all()
        if not credentials:
            raise NotFoundError("credentials")
        return credentials
