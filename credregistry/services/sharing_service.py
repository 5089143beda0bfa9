from __future__ import annotations

import logging
from collections.abc import Iterable

from credregistry.core.errors import NotFoundError
from credregistry.core.metrics import CREDENTIAL_OPERATIONS
from credregistry.models.credential import CredentialShare
from credregistry.repos.credential_repo import CredentialRepo
from credregistry.repos.share_repo import CredentialShareRepo
from credregistry.services.locks import KeyedLock

logger = logging.getLogger(__name__)


class SharingService:
    """Creates share grants on existing credentials.

    Only the credential's existence is checked.  Permission strings are
    stored as given, a credential may be shared any number of times, and
    revoked credentials can still be shared.
    """

    def __init__(
        self,
        *,
        credentials: CredentialRepo,
        shares: CredentialShareRepo,
        locks: KeyedLock | None = None,
    ) -> None:
        self._credentials = credentials
        self._shares = shares
        self._locks = locks or KeyedLock()

    def share(
        self,
        credential_id: str,
        *,
        recipient_id: str,
        expiration_date: int | None,
        permissions: Iterable[str] = (),
    ) -> CredentialShare:
        with self._locks.hold(credential_id):
            if self._credentials.get_by_id(credential_id) is None:
                CREDENTIAL_OPERATIONS.labels(operation="share", result="rejected").inc()
                logger.warning("Share rejected: credential=%s not found", credential_id)
                raise NotFoundError("Credential", credential_id)

            grant = CredentialShare.new(
                credential_id=credential_id,
                recipient_id=recipient_id,
                expiration_date=expiration_date,
                permissions=tuple(permissions),
            )
            self._shares.add(grant)

        CREDENTIAL_OPERATIONS.labels(operation="share", result="ok").inc()
        logger.info(
            "Shared credential id=%s with recipient=%s permissions=%s",
            credential_id,
            recipient_id,
            ",".join(grant.permissions) or "-",
            extra={"credential_id": credential_id, "operation": "share"},
        )
        return grant

    def list_shares(self, credential_id: str) -> list[CredentialShare]:
        return self._shares.list_by_credential(credential_id)
