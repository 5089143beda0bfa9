from __future__ import annotations

from typing import Protocol

from credregistry.models.credential import CredentialShare


class CredentialShareRepo(Protocol):
    def get_by_id(self, share_id: str) -> CredentialShare | None: ...
    def add(self, share: CredentialShare) -> None: ...
    def list_all(self) -> list[CredentialShare]: ...
    def list_by_credential(self, credential_id: str) -> list[CredentialShare]: ...


class InMemoryCredentialShareRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, CredentialShare] = {}

    def get_by_id(self, share_id: str) -> CredentialShare | None:
        return self._by_id.get(share_id)

    def add(self, share: CredentialShare) -> None:
        if share.id in self._by_id:
            raise ValueError("share id already exists")
        self._by_id[share.id] = share

    def list_all(self) -> list[CredentialShare]:
        return list(self._by_id.values())

    def list_by_credential(self, credential_id: str) -> list[CredentialShare]:
        return [s for s in list(self._by_id.values()) if s.credential_id == credential_id]
