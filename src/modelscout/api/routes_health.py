"""Health, version, and metrics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from modelscout import __version__

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    catalog = request.app.state.catalog
    return {
        "status": "ok" if catalog.loaded else "degraded",
        "catalog": "loaded" if catalog.loaded else "unavailable",
    }


@router.get("/version")
async def version() -> dict:
    return {"version": __version__}


@router.get("/metrics")
async def metrics(request: Request) -> Response:
    return Response(generate_latest(request.app.state.metrics_registry), media_type=CONTENT_TYPE_LATEST)
