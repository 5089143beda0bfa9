"""Optional Redis connection for the notification log.

When REDIS_URL is configured, notifications are pushed onto Redis lists
so every API instance shares one log; when it is unset (local dev,
tests) the registry keeps the log in process memory and no Redis
server is needed.

The engines are synchronous, so this is the blocking client backed by a
connection pool; endpoints run on FastAPI's thread pool and each call
borrows a pooled connection.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import redis

from credregistry.core.config import SETTINGS

logger = logging.getLogger(__name__)

if SETTINGS.redis_url:
    redis_client: redis.Redis | None = redis.Redis.from_url(  # type: ignore[type-arg]
        SETTINGS.redis_url,
        decode_responses=True,
        max_connections=20,
        socket_timeout=2.0,
    )
else:
    redis_client = None


def ping() -> str:
    """Health status of the Redis dependency: ok | degraded | not_configured."""
    if redis_client is None:
        return "not_configured"
    try:
        redis_client.ping()
    except redis.RedisError:
        logger.warning("Redis ping failed")
        return "degraded"
    return "ok"


@asynccontextmanager
async def lifespan_redis():
    """Verify Redis on startup and release the pool on shutdown.

    A failed startup ping is logged, not raised: the sink already logs
    and drops notifications it cannot deliver, so the registry keeps
    serving.
    """
    if redis_client is None:
        logger.info("No REDIS_URL configured; notifications use the in-memory log")
        yield
        return

    if ping() == "ok":
        logger.info("Redis connected: %s", SETTINGS.redis_url)
    else:
        logger.error("Redis unreachable on startup: %s", SETTINGS.redis_url)

    yield

    redis_client.close()
    logger.info("Redis connection pool closed")
