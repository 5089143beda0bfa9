from __future__ import annotations

import datetime
from collections.abc import Callable

Clock = Callable[[], int]


def now() -> int:
    """Current UTC time as integer Unix epoch seconds."""
    return int(datetime.datetime.now(datetime.UTC).timestamp())


def to_date(ts: int) -> str:
    """Render an epoch timestamp as a UTC calendar date (YYYY-MM-DD)."""
    return datetime.datetime.fromtimestamp(ts, datetime.UTC).date().isoformat()
