"""Prometheus scrape endpoint.

Returns every metric in core/metrics.py in the text exposition format,
for example:

  credential_operations_total{operation="revoke",result="ok"} 3.0
  notifications_total{backend="memory",result="sent"} 5.0
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
