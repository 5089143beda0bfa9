from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from credregistry.api.credentials import router as credentials_router
from credregistry.api.error_handlers import register_error_handlers
from credregistry.api.health import router as health_router
from credregistry.api.institutions import router as institutions_router
from credregistry.api.metrics_endpoint import router as metrics_router
from credregistry.api.notifications import router as notifications_router
from credregistry.api.students import router as students_router
from credregistry.core.config import SETTINGS
from credregistry.core.logging import setup_logging
from credregistry.db.redis import lifespan_redis
from credregistry.middleware.metrics import MetricsMiddleware
from credregistry.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_redis():
        yield


app = FastAPI(
    title="credential-registry",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

# Last-added runs first: RequestContext -> Metrics -> CORS -> route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

register_error_handlers(app)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(students_router)
app.include_router(institutions_router)
app.include_router(credentials_router)
app.include_router(notifications_router)

logger.info(
    "credential-registry started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
