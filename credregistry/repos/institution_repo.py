from __future__ import annotations

from typing import Protocol

from credregistry.models.institution import Institution


class InstitutionRepo(Protocol):
    def get_by_id(self, institution_id: str) -> Institution | None: ...
    def add(self, institution: Institution) -> None: ...
    def list_all(self) -> list[Institution]: ...


class InMemoryInstitutionRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, Institution] = {}

    def get_by_id(self, institution_id: str) -> Institution | None:
        return self._by_id.get(institution_id)

    def add(self, institution: Institution) -> None:
        if institution.id in self._by_id:
            raise ValueError("institution id already exists")
        self._by_id[institution.id] = institution

    def list_all(self) -> list[Institution]:
        return list(self._by_id.values())
