"""Liveness and readiness probes.

/health reports per-dependency status and stays 200 even when degraded;
the ``status`` field carries the verdict.  /ready answers whether this
instance can take traffic: the stores live in process memory, so it is
ready whenever it can respond.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from credregistry.db import redis as redis_db
from credregistry.services.registry import Registry, get_registry

router = APIRouter(tags=["health"])


@router.get("/health")
def health(reg: Annotated[Registry, Depends(get_registry)]) -> dict:
    checks = {"redis": redis_db.ping()}
    overall = "degraded" if "degraded" in checks.values() else "ok"
    return {
        "status": overall,
        "checks": checks,
        "counts": {
            "students": len(reg.students.list_all()),
            "institutions": len(reg.institutions.list_all()),
            "credentials": len(reg.credentials.list_all()),
            "shares": len(reg.shares.list_all()),
        },
    }


@router.get("/ready")
def ready() -> Response:
    return Response(status_code=200)
