"""Search pipeline: collect, filter, score, rank."""

from __future__ import annotations

import logging

from modelscout.catalog.types import Provider
from modelscout.config import Settings
from modelscout.matching.filters import filter_candidates
from modelscout.matching.ranking import Ranking, rank
from modelscout.matching.scoring import score_candidates
from modelscout.matching.types import Requirements, collect_candidates

logger = logging.getLogger("modelscout.matching")


def find_matches(providers: list[Provider], requirements: Requirements, settings: Settings) -> Ranking:
    candidates = collect_candidates(providers)
    matches = filter_candidates(candidates, requirements)
    ranking = rank(score_candidates(matches, requirements, settings.search_scoring_policy))
    logger.debug(
        "Search %s: %d of %d candidates match (policy=%s)",
        requirements,
        len(ranking),
        len(candidates),
        settings.search_scoring_policy,
    )
    return ranking
