from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque, collision-free identifier for a newly created entity."""
    return str(uuid.uuid4())
