"""Token-based cost estimation with prompt-caching discounts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from modelscout.catalog.lookup import find_model
from modelscout.catalog.types import Model, Provider
from modelscout.costs.schemas import BatchOutcome, CompareRequest, CostResult, CostScenario
from modelscout.errors import InvalidScenarioError, NotFoundError
from modelscout.observability.metrics import Metrics

logger = logging.getLogger("modelscout.costs")

TOKENS_PER_PRICE_UNIT = 1_000_000


def calculate_cost(
    model: Model,
    input_tokens: int,
    output_tokens: int,
    cached_ratio: float = 0.0,
) -> tuple[float, float]:
    """Return ``(input_cost, output_cost)`` in USD.

    ``cached_ratio`` of the input is billed at the cached input rate and the
    rest at the standard rate.  Output is always billed at the standard
    output rate; caching only discounts input context.
    """
    cached_input = input_tokens * cached_ratio
    uncached_input = input_tokens - cached_input

    input_cost = (
        uncached_input * model.cost_per_1m_in + cached_input * model.cost_per_1m_in_cached
    ) / TOKENS_PER_PRICE_UNIT
    output_cost = output_tokens * model.cost_per_1m_out / TOKENS_PER_PRICE_UNIT
    return input_cost, output_cost


def estimate(model: Model, provider: Provider, scenario: CostScenario) -> CostResult:
    input_cost, output_cost = calculate_cost(model, scenario.input_tokens, scenario.output_tokens, scenario.cached_ratio)
    return CostResult(
        model=model.name,
        provider=provider.name,
        input_cost=input_cost,
        output_cost=output_cost,
        total_cost=input_cost + output_cost,
    )


def estimate_scenario(providers: list[Provider], scenario: CostScenario) -> CostResult:
    """Resolve the scenario's model and price it.  Raises ``NotFoundError``."""
    model, provider = find_model(providers, scenario.model)
    return estimate(model, provider, scenario)


def estimate_batch(
    providers: list[Provider],
    scenarios: list[CostScenario],
    compare: bool = False,
    metrics: Metrics | None = None,
) -> BatchOutcome:
    """Price every scenario independently.

    Scenarios whose model cannot be resolved are skipped and reported in
    ``BatchOutcome.skipped``.  Results keep scenario order unless ``compare``
    is set, in which case they are sorted by ascending total cost.
    """
    results: list[CostResult] = []
    skipped: list[str] = []

    for scenario in scenarios:
        try:
            results.append(estimate_scenario(providers, scenario))
        except NotFoundError:
            logger.warning("Skipping scenario, model not found: %s", scenario.model)
            skipped.append(scenario.model)

    if compare:
        results.sort(key=lambda r: r.total_cost)

    if metrics:
        metrics.cost_estimates.inc(len(results))
        metrics.batch_skipped.inc(len(skipped))

    return BatchOutcome(results=results, skipped=skipped)


def compare_models(providers: list[Provider], request: CompareRequest, metrics: Metrics | None = None) -> BatchOutcome:
    return estimate_batch(providers, request.scenarios(), compare=True, metrics=metrics)


def parse_scenarios(data: Any, source: str | None = None) -> list[CostScenario]:
    """Validate decoded batch records.  Raises ``InvalidScenarioError``."""
    if not isinstance(data, list):
        raise InvalidScenarioError("batch must be a JSON array of scenarios", source, structural=True)

    scenarios = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise InvalidScenarioError(f"record {index}: expected an object", source)
        try:
            scenarios.append(CostScenario.model_validate(record))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in exc.errors()
            )
            raise InvalidScenarioError(f"record {index}: {problems}", source) from exc
    return scenarios


def load_batch_file(path: str | Path) -> list[CostScenario]:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except OSError as exc:
        raise InvalidScenarioError(f"cannot read batch file ({exc})", str(path), structural=True) from exc
    except json.JSONDecodeError as exc:
        raise InvalidScenarioError(f"error parsing batch file ({exc})", str(path), structural=True) from exc
    return parse_scenarios(data, str(path))
