"""Tests for ranking and the search pipeline."""

from modelscout.catalog.types import Model, Provider
from modelscout.config import Settings
from modelscout.matching.engine import find_matches
from modelscout.matching.ranking import Ranking, rank
from modelscout.matching.types import MatchCandidate, Requirements

PROVIDER = Provider(id="p", name="P")


def _scored(name: str, score: float) -> MatchCandidate:
    return MatchCandidate(model=Model(id=name, name=name), provider=PROVIDER, score=score)


def test_descending_score():
    ranking = rank([_scored("a", 10), _scored("b", 30), _scored("c", 20)])
    assert [c.model.id for c in ranking] == ["b", "c", "a"]


def test_ties_keep_input_order():
    ranking = rank([_scored("a", 5), _scored("b", 9), _scored("c", 5), _scored("d", 5)])
    assert [c.model.id for c in ranking] == ["b", "a", "c", "d"]


def test_ranking_is_deterministic():
    candidates = [_scored(str(i), i % 3) for i in range(20)]
    assert rank(candidates) == rank(list(candidates))


def test_top_is_a_view():
    ranking = rank([_scored("a", 1), _scored("b", 2), _scored("c", 3)])
    assert [c.model.id for c in ranking.top(2)] == ["c", "b"]
    assert len(ranking.top(10)) == 3
    assert ranking.top(0) == []
    assert len(ranking) == 3


def test_sequence_protocol():
    ranking = rank([_scored("a", 1), _scored("b", 2)])
    assert isinstance(ranking, Ranking)
    assert ranking[0].model.id == "b"
    assert bool(rank([])) is False


def test_find_matches(providers):
    ranking = find_matches(providers, Requirements(vision=True, budget=2.5), Settings())
    # claude-sonnet-4 costs 3.0 and is filtered out
    assert [c.model.id for c in ranking] == ["gpt-4o-mini", "gpt-4o"]
    assert ranking[0].reasons == ("Cost penalty -0.015", "Extended context (100K+)", "Vision")


def test_find_matches_uses_configured_policy(providers):
    ranking = find_matches(providers, Requirements(), Settings(search_scoring_policy="requirements"))
    assert all("Meets context requirement" in c.reasons for c in ranking)
