from __future__ import annotations

from typing import Protocol

from credregistry.models.credential import Credential


class CredentialRepo(Protocol):
    def get_by_id(self, credential_id: str) -> Credential | None: ...
    def add(self, credential: Credential) -> None: ...
    def update(self, credential: Credential) -> None: ...
    def list_all(self) -> list[Credential]: ...


class InMemoryCredentialRepo:
    """Credentials keyed by id; enumeration follows insertion order.

    Credentials are never deleted.  ``update`` replaces the stored record
    in place, so a renewed or revoked credential keeps its position.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, Credential] = {}

    def get_by_id(self, credential_id: str) -> Credential | None:
        return self._by_id.get(credential_id)

    def add(self, credential: Credential) -> None:
        if credential.id in self._by_id:
            raise ValueError("credential id already exists")
        self._by_id[credential.id] = credential

    def update(self, credential: Credential) -> None:
        if credential.id not in self._by_id:
            raise KeyError("credential not found")
        self._by_id[credential.id] = credential

    def list_all(self) -> list[Credential]:
        return list(self._by_id.values())
