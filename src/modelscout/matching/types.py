"""Value types for the filter/score/rank pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from modelscout.catalog.types import Model, Provider


@dataclass(frozen=True)
class Requirements:
    """Constraints on candidate models.  Zero / False means unconstrained."""

    budget: float = 0.0
    """Ceiling on input cost per 1M tokens."""

    min_context: int = 0
    reasoning: bool = False
    vision: bool = False


@dataclass(frozen=True)
class MatchCandidate:
    model: Model
    provider: Provider
    score: float = 0.0
    reasons: tuple[str, ...] = ()

    @property
    def cost(self) -> float:
        return self.model.cost_per_1m_in


def collect_candidates(providers: list[Provider]) -> list[MatchCandidate]:
    """Flatten the catalog into unscored candidates in catalog order."""
    return [MatchCandidate(model=m, provider=p) for p in providers for m in p.models]
