from __future__ import annotations

from dataclasses import asdict, dataclass

from credregistry.core.ids import new_id


@dataclass(frozen=True, slots=True)
class Notification:
    """One entry in the append-only notification log."""

    id: str
    recipient_id: str
    message: str
    sent_at: int

    @staticmethod
    def new(*, recipient_id: str, message: str, sent_at: int) -> Notification:
        return Notification(
            id=new_id(), recipient_id=recipient_id, message=message, sent_at=sent_at
        )

    def to_dict(self) -> dict:
        return asdict(self)
