"""Scoring policies.

``simple`` ranks a browse/search result by general merit,
``requirements`` weighs a model against the answers gathered by the wizard.
Both are pure functions of (model, requirements).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from modelscout.catalog.types import Model
from modelscout.errors import UnsupportedOutputModeError
from modelscout.matching.types import MatchCandidate, Requirements

BASE_SCORE = 100.0

ScoringPolicy = Callable[[Model, Requirements], tuple[float, tuple[str, ...]]]


def score_simple(model: Model, requirements: Requirements | None = None) -> tuple[float, tuple[str, ...]]:
    score = BASE_SCORE
    reasons: list[str] = []

    # Lower cost = higher score
    if model.cost_per_1m_in > 0:
        penalty = min(model.cost_per_1m_in / 10.0, 50.0)
        score -= penalty
        reasons.append(f"Cost penalty -{penalty:g}")

    if model.context_window >= 200_000:
        score += 20
        reasons.append("Large context (200K+)")
    elif model.context_window >= 100_000:
        score += 10
        reasons.append("Extended context (100K+)")

    if model.can_reason:
        score += 15
        reasons.append("Reasoning")

    if model.supports_images:
        score += 10
        reasons.append("Vision")

    return score, tuple(reasons)


def score_requirements(model: Model, requirements: Requirements) -> tuple[float, tuple[str, ...]]:
    score = BASE_SCORE
    reasons: list[str] = []
    cost = model.cost_per_1m_in

    if requirements.budget > 0 and cost > requirements.budget:
        score -= 100
        reasons.append("Over budget")
    elif cost <= requirements.budget / 2:
        score += 30
        reasons.append("Well under budget")

    if model.context_window >= requirements.min_context:
        score += 20
        reasons.append("Meets context requirement")
    else:
        score -= 50
        reasons.append("Below context requirement")

    if requirements.reasoning:
        if model.can_reason:
            score += 25
            reasons.append("Has reasoning")
        else:
            score -= 50
            reasons.append("No reasoning")

    if requirements.vision:
        if model.supports_images:
            score += 25
            reasons.append("Has vision")
        else:
            score -= 50
            reasons.append("No vision")

    return score, tuple(reasons)


POLICIES: dict[str, ScoringPolicy] = {
    "simple": score_simple,
    "requirements": score_requirements,
}


def get_policy(name: str) -> ScoringPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise UnsupportedOutputModeError("scoring policy", name, tuple(POLICIES)) from None


def score_candidates(
    candidates: list[MatchCandidate],
    requirements: Requirements,
    policy: str = "simple",
) -> list[MatchCandidate]:
    """Return freshly scored copies of ``candidates``; inputs are untouched."""
    scorer = get_policy(policy)
    scored = []
    for candidate in candidates:
        score, reasons = scorer(candidate.model, requirements)
        scored.append(replace(candidate, score=score, reasons=reasons))
    return scored
