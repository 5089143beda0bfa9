from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from credregistry.api.dependencies import require_token
from credregistry.services.registry import Registry, get_registry

router = APIRouter(prefix="/v1/notifications", tags=["notifications"])


class NotificationOut(BaseModel):
    id: str
    recipient_id: str
    message: str
    sent_at: int


@router.get(
    "/{recipient_id}",
    response_model=list[NotificationOut],
    dependencies=[Depends(require_token)],
)
def list_notifications(
    recipient_id: str,
    reg: Annotated[Registry, Depends(get_registry)],
) -> list[NotificationOut]:
    """Notifications sent to one recipient, oldest first.

    An empty list is a normal answer here: the log is an outbox, not a
    registry collection.
    """
    return [
        NotificationOut(
            id=n.id, recipient_id=n.recipient_id, message=n.message, sent_at=n.sent_at
        )
        for n in reg.notifier.for_recipient(recipient_id)
    ]
