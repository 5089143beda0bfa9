"""Notification sink: one-way delivery of human-readable event messages.

The lifecycle engine tells a student when their credential is renewed or
revoked by calling ``sink.send(recipient_id, message)``.  The call is
fire-and-forget: a sink never raises to the engine.  Delivery problems
are logged and counted here, and the triggering operation still
succeeds.

Two backends share the protocol:

  InMemoryNotificationSink: append-only list in process memory
                            (dev, tests, single instance).
  RedisNotificationSink:    JSON records pushed onto one Redis list
                            per recipient (shared across instances).
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Protocol, runtime_checkable

import redis

from credregistry.core.clock import Clock, now
from credregistry.core.metrics import NOTIFICATIONS
from credregistry.models.notification import Notification

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationSink(Protocol):
    def send(self, recipient_id: str, message: str) -> None: ...


@runtime_checkable
class NotificationLog(NotificationSink, Protocol):
    def for_recipient(self, recipient_id: str) -> list[Notification]: ...


class InMemoryNotificationSink:
    def __init__(self, clock: Clock = now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._log: list[Notification] = []

    def send(self, recipient_id: str, message: str) -> None:
        notification = Notification.new(
            recipient_id=recipient_id, message=message, sent_at=self._clock()
        )
        with self._lock:
            self._log.append(notification)
        NOTIFICATIONS.labels(backend="memory", result="sent").inc()
        logger.info("Notification sent to %s: %s", recipient_id, message)

    def for_recipient(self, recipient_id: str) -> list[Notification]:
        with self._lock:
            return [n for n in self._log if n.recipient_id == recipient_id]


class RedisNotificationSink:
    """Redis-backed log; newest entries are pushed to the head of each list."""

    _PREFIX = "notifications:"

    def __init__(self, redis_client, clock: Clock = now, max_per_recipient: int = 500) -> None:
        self._redis = redis_client
        self._clock = clock
        self._max = max_per_recipient

    def send(self, recipient_id: str, message: str) -> None:
        notification = Notification.new(
            recipient_id=recipient_id, message=message, sent_at=self._clock()
        )
        key = f"{self._PREFIX}{recipient_id}"
        try:
            pipe = self._redis.pipeline()
            pipe.lpush(key, json.dumps(notification.to_dict()))
            pipe.ltrim(key, 0, self._max - 1)
            pipe.execute()
        except redis.RedisError:
            NOTIFICATIONS.labels(backend="redis", result="failed").inc()
            logger.exception("Notification to %s dropped", recipient_id)
            return
        NOTIFICATIONS.labels(backend="redis", result="sent").inc()
        logger.info("Notification sent to %s: %s", recipient_id, message)

    def for_recipient(self, recipient_id: str) -> list[Notification]:
        try:
            raw = self._redis.lrange(f"{self._PREFIX}{recipient_id}", 0, -1)
        except redis.RedisError:
            NOTIFICATIONS.labels(backend="redis", result="read_failed").inc()
            logger.exception("Notification log for %s unavailable", recipient_id)
            return []
        # Stored newest-first; return in send order like the in-memory log.
        return [Notification(**json.loads(item)) for item in reversed(raw)]
