from __future__ import annotations

from dataclasses import dataclass

from credregistry.core.ids import new_id


@dataclass(frozen=True, slots=True)
class Institution:
    id: str
    name: str
    address: str
    created_at: int

    @staticmethod
    def new(*, name: str, address: str, created_at: int) -> Institution:
        return Institution(
            id=new_id(), name=name, address=address, created_at=created_at
        )
