"""Catalog browsing, search and model lookup endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from modelscout.api.schemas import CandidateList
from modelscout.catalog.lookup import find_model, find_provider
from modelscout.catalog.types import Provider
from modelscout.config import Settings
from modelscout.dependencies import get_app_metrics, get_app_settings, get_providers
from modelscout.matching.engine import find_matches
from modelscout.matching.listing import filter_models, list_providers, sort_models
from modelscout.matching.types import Requirements
from modelscout.observability.metrics import Metrics
from modelscout.output.formatters import candidate_record

router = APIRouter(prefix="/v1")


def _provider_summary(provider: Provider) -> dict[str, Any]:
    # api keys stay out of HTTP responses
    return {
        "id": provider.id,
        "name": provider.name,
        "type": provider.type,
        "api_endpoint": provider.api_endpoint,
        "default_large_model_id": provider.default_large_model_id,
        "default_small_model_id": provider.default_small_model_id,
        "model_count": len(provider.models),
    }


@router.get("/providers")
async def providers(
    provider_type: str | None = Query(None, alias="type", description="Only providers of this type"),
    catalog: list[Provider] = Depends(get_providers),
) -> dict:
    return {"object": "list", "data": [_provider_summary(p) for p in list_providers(catalog, provider_type)]}


@router.get("/providers/{provider_id}/models")
async def provider_models(
    provider_id: str,
    reasoning: bool = False,
    vision: bool = False,
    sort: str = "name",
    catalog: list[Provider] = Depends(get_providers),
) -> dict:
    provider = find_provider(catalog, provider_id)
    models = sort_models(filter_models(provider.models, reasoning, vision), sort)
    return {
        "object": "list",
        "provider": _provider_summary(provider),
        "data": [m.to_dict() for m in models],
    }


@router.get("/models/search", response_model=CandidateList)
async def search_models(
    max_cost: float = Query(0.0, ge=0),
    min_context: int = Query(0, ge=0),
    reasoning: bool = False,
    vision: bool = False,
    limit: int | None = Query(None, ge=1),
    catalog: list[Provider] = Depends(get_providers),
    settings: Settings = Depends(get_app_settings),
) -> CandidateList:
    requirements = Requirements(budget=max_cost, min_context=min_context, reasoning=reasoning, vision=vision)
    ranking = find_matches(catalog, requirements, settings)
    shown = ranking.top(limit or settings.search_limit)
    return CandidateList(total=len(ranking), data=[candidate_record(c) for c in shown])


@router.get("/models/{token}")
async def get_model(
    token: str,
    provider: str | None = None,
    catalog: list[Provider] = Depends(get_providers),
    metrics: Metrics = Depends(get_app_metrics),
) -> dict:
    model, owner = find_model(catalog, token, provider, metrics=metrics)
    return {"model": model.to_dict(), "provider": _provider_summary(owner)}
