"""Cost estimation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from modelscout.api.schemas import BatchRequest, CostListResponse
from modelscout.catalog.types import Provider
from modelscout.costs.estimator import compare_models, estimate_batch, estimate_scenario
from modelscout.costs.schemas import CompareRequest, CostResult, CostScenario
from modelscout.dependencies import get_app_metrics, get_providers
from modelscout.observability.metrics import Metrics

router = APIRouter(prefix="/v1/costs")


@router.post("/estimate", response_model=CostResult)
async def estimate(
    body: CostScenario,
    catalog: list[Provider] = Depends(get_providers),
    metrics: Metrics = Depends(get_app_metrics),
) -> CostResult:
    result = estimate_scenario(catalog, body)
    metrics.cost_estimates.inc()
    return result


@router.post("/compare", response_model=CostListResponse)
async def compare(
    body: CompareRequest,
    catalog: list[Provider] = Depends(get_providers),
    metrics: Metrics = Depends(get_app_metrics),
) -> CostListResponse:
    outcome = compare_models(catalog, body, metrics=metrics)
    return CostListResponse(data=outcome.results, skipped=outcome.skipped)


@router.post("/batch", response_model=CostListResponse)
async def batch(
    body: BatchRequest,
    catalog: list[Provider] = Depends(get_providers),
    metrics: Metrics = Depends(get_app_metrics),
) -> CostListResponse:
    outcome = estimate_batch(catalog, body.scenarios, compare=body.compare, metrics=metrics)
    return CostListResponse(data=outcome.results, skipped=outcome.skipped)
