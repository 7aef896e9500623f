"""Constraint predicates over candidate lists."""

from __future__ import annotations

from modelscout.matching.types import MatchCandidate, Requirements


def satisfies(candidate: MatchCandidate, requirements: Requirements) -> bool:
    model = candidate.model

    if requirements.budget > 0 and candidate.cost > requirements.budget:
        return False

    if requirements.min_context > 0 and model.context_window < requirements.min_context:
        return False

    if requirements.reasoning and not model.can_reason:
        return False

    if requirements.vision and not model.supports_images:
        return False

    return True


def filter_candidates(candidates: list[MatchCandidate], requirements: Requirements) -> list[MatchCandidate]:
    """Keep the candidates meeting every constraint, in their input order."""
    return [c for c in candidates if satisfies(c, requirements)]
