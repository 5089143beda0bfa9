"""Process-wide wiring of stores and engines.

The four stores are created once at import and handed to the engines
that own them; endpoints reach them through ``get_registry()`` so tests
can swap in a fresh Registry with ``app.dependency_overrides`` or reset
this one between cases.
"""

from __future__ import annotations

from dataclasses import dataclass

from credregistry.core.clock import Clock, now
from credregistry.db.redis import redis_client
from credregistry.repos.credential_repo import InMemoryCredentialRepo
from credregistry.repos.institution_repo import InMemoryInstitutionRepo
from credregistry.repos.share_repo import InMemoryCredentialShareRepo
from credregistry.repos.student_repo import InMemoryStudentRepo
from credregistry.services.credential_service import CredentialService
from credregistry.services.locks import KeyedLock
from credregistry.services.notifications import (
    InMemoryNotificationSink,
    NotificationLog,
    RedisNotificationSink,
)
from credregistry.services.query_service import QueryService
from credregistry.services.sharing_service import SharingService


@dataclass
class Registry:
    students: InMemoryStudentRepo
    institutions: InMemoryInstitutionRepo
    credentials: InMemoryCredentialRepo
    shares: InMemoryCredentialShareRepo
    notifier: NotificationLog
    lifecycle: CredentialService
    sharing: SharingService
    queries: QueryService
    clock: Clock = now


def build_registry(
    *, notifier: NotificationLog | None = None, clock: Clock = now
) -> Registry:
    students = InMemoryStudentRepo()
    institutions = InMemoryInstitutionRepo()
    credentials = InMemoryCredentialRepo()
    shares = InMemoryCredentialShareRepo()
    locks = KeyedLock()
    if notifier is None:
        notifier = InMemoryNotificationSink(clock=clock)

    return Registry(
        students=students,
        institutions=institutions,
        credentials=credentials,
        shares=shares,
        notifier=notifier,
        lifecycle=CredentialService(
            credentials=credentials,
            students=students,
            institutions=institutions,
            notifier=notifier,
            locks=locks,
            clock=clock,
        ),
        sharing=SharingService(credentials=credentials, shares=shares, locks=locks),
        queries=QueryService(credentials=credentials, clock=clock),
        clock=clock,
    )


# ---------------------------------------------------------------------------
# Module-level singleton; notification backend depends on Redis
# ---------------------------------------------------------------------------

if redis_client is not None:
    registry = build_registry(notifier=RedisNotificationSink(redis_client))
else:
    registry = build_registry()


def get_registry() -> Registry:
    return registry
