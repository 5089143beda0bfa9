"""Credential lifecycle engine: issue, renew, revoke.

State machine for one credential:

  Active --renew-->  Active   (new five-year window, renewal_count + 1;
                               refused once revoked or expired)
  Active --revoke--> Revoked  (terminal; revoked never flips back)
  Active --time-->   Expired  (not stored: expiration_date < now)
  Expired --revoke-> Revoked  (allowed: revocation only looks at the
                               revoked flag, so history can be revoked)

Every operation checks all of its preconditions before its single write,
inside a per-credential critical section, so a rejected call leaves the
store untouched and concurrent renew/revoke of one credential cannot
lose an update.
"""

from __future__ import annotations

import logging

from credregistry.core.clock import Clock, now, to_date
from credregistry.core.errors import (
    ALREADY_REVOKED,
    EXPIRED,
    MISSING_REASON,
    InvalidStateError,
    NotFoundError,
    RegistryError,
    ValidationError,
    require_text,
)
from credregistry.core.metrics import CREDENTIAL_OPERATIONS
from credregistry.models.credential import Credential
from credregistry.repos.credential_repo import CredentialRepo
from credregistry.repos.institution_repo import InstitutionRepo
from credregistry.repos.student_repo import StudentRepo
from credregistry.services.locks import KeyedLock
from credregistry.services.notifications import NotificationSink

logger = logging.getLogger(__name__)


class CredentialService:
    def __init__(
        self,
        *,
        credentials: CredentialRepo,
        students: StudentRepo,
        institutions: InstitutionRepo,
        notifier: NotificationSink,
        locks: KeyedLock | None = None,
        clock: Clock = now,
    ) -> None:
        self._credentials = credentials
        self._students = students
        self._institutions = institutions
        self._notifier = notifier
        self._locks = locks or KeyedLock()
        self._clock = clock

    def get(self, credential_id: str) -> Credential:
        credential = self._credentials.get_by_id(credential_id)
        if credential is None:
            raise NotFoundError("Credential", credential_id)
        return credential

    def issue(
        self,
        *,
        student_id: str,
        institution_id: str,
        course: str,
        degree: str,
        graduation_year: int | None = None,
    ) -> Credential:
        try:
            course = require_text("course", course)
            degree = require_text("degree", degree)

            with self._locks.hold(f"student:{student_id}", f"institution:{institution_id}"):
                if self._students.get_by_id(student_id) is None:
                    raise NotFoundError("Student", student_id)
                if self._institutions.get_by_id(institution_id) is None:
                    raise NotFoundError("Institution", institution_id)

                credential = Credential.new(
                    student_id=student_id,
                    institution_id=institution_id,
                    course=course,
                    degree=degree,
                    graduation_year=graduation_year,
                    issued_at=self._clock(),
                )
                self._credentials.add(credential)
        except RegistryError as e:
            self._rejected("issue", None, e)
            raise

        CREDENTIAL_OPERATIONS.labels(operation="issue", result="ok").inc()
        logger.info(
            "Issued credential id=%s student=%s institution=%s",
            credential.id,
            student_id,
            institution_id,
            extra={"credential_id": credential.id, "operation": "issue"},
        )
        return credential

    def renew(self, credential_id: str) -> Credential:
        try:
            with self._locks.hold(credential_id):
                current = self.get(credential_id)
                ts = self._clock()
                if current.revoked:
                    raise InvalidStateError(
                        "Cannot renew a revoked credential", kind=ALREADY_REVOKED
                    )
                if current.is_expired(ts):
                    raise InvalidStateError(
                        "Cannot renew an expired credential", kind=EXPIRED
                    )

                renewed = current.renewed(ts)
                self._credentials.update(renewed)
        except RegistryError as e:
            self._rejected("renew", credential_id, e)
            raise

        CREDENTIAL_OPERATIONS.labels(operation="renew", result="ok").inc()
        logger.info(
            "Renewed credential id=%s count=%d expires=%s",
            renewed.id,
            renewed.renewal_count,
            to_date(renewed.expiration_date),
            extra={"credential_id": renewed.id, "operation": "renew"},
        )
        self._notify(
            renewed.student_id,
            "Your credential has been renewed. New expiration date: "
            f"{to_date(renewed.expiration_date)}",
        )
        return renewed

    def revoke(self, credential_id: str, reason: str) -> Credential:
        try:
            if not (reason or "").strip():
                raise ValidationError(
                    "'reason' is required for revocation",
                    kind=MISSING_REASON,
                    field="reason",
                )

            with self._locks.hold(credential_id):
                current = self.get(credential_id)
                if current.revoked:
                    raise InvalidStateError(
                        "Credential is already revoked", kind=ALREADY_REVOKED
                    )

                revoked = current.revoked_copy()
                self._credentials.update(revoked)
        except RegistryError as e:
            self._rejected("revoke", credential_id, e)
            raise

        CREDENTIAL_OPERATIONS.labels(operation="revoke", result="ok").inc()
        logger.info(
            "Revoked credential id=%s reason=%s",
            revoked.id,
            reason,
            extra={"credential_id": revoked.id, "operation": "revoke"},
        )
        self._notify(revoked.student_id, f"Your credential has been revoked: {reason}")
        return revoked

    def _notify(self, recipient_id: str, message: str) -> None:
        # Sink errors never reach the caller; the write is already committed.
        try:
            self._notifier.send(recipient_id, message)
        except Exception:
            logger.exception("Notification sink failed for recipient=%s", recipient_id)

    @staticmethod
    def _rejected(operation: str, credential_id: str | None, error: RegistryError) -> None:
        CREDENTIAL_OPERATIONS.labels(operation=operation, result="rejected").inc()
        logger.warning(
            "Rejected %s credential=%s kind=%s: %s",
            operation,
            credential_id or "-",
            error.kind,
            error.message,
            extra={"credential_id": credential_id, "operation": operation},
        )
