"""Tests for batch and comparison estimation."""

import json

import pytest

from modelscout.catalog.types import Model, Provider
from modelscout.costs.estimator import compare_models, estimate_batch, load_batch_file, parse_scenarios
from modelscout.costs.schemas import CompareRequest, CostScenario
from modelscout.errors import InvalidScenarioError

PROVIDER = Provider(
    id="p",
    name="P",
    models=(
        Model(id="pricey", name="Pricey", cost_per_1m_in=10.0, cost_per_1m_out=30.0),
        Model(id="cheap", name="Cheap", cost_per_1m_in=0.1, cost_per_1m_out=0.4),
        Model(id="mid", name="Mid", cost_per_1m_in=1.0, cost_per_1m_out=2.0),
    ),
)


def _scenario(model: str) -> CostScenario:
    return CostScenario(model=model, input_tokens=1000, output_tokens=1000)


def test_results_keep_scenario_order():
    outcome = estimate_batch([PROVIDER], [_scenario("pricey"), _scenario("cheap"), _scenario("mid")])
    assert [r.model for r in outcome.results] == ["Pricey", "Cheap", "Mid"]
    assert outcome.skipped == []


def test_compare_sorts_by_total_cost():
    outcome = estimate_batch([PROVIDER], [_scenario("pricey"), _scenario("cheap"), _scenario("mid")], compare=True)
    totals = [r.total_cost for r in outcome.results]
    assert totals == sorted(totals)
    assert [r.model for r in outcome.results] == ["Cheap", "Mid", "Pricey"]


def test_unknown_model_is_skipped_not_fatal():
    scenarios = [_scenario("pricey"), _scenario("nope"), _scenario("mid"), _scenario("gone")]
    outcome = estimate_batch([PROVIDER], scenarios)
    assert [r.model for r in outcome.results] == ["Pricey", "Mid"]
    assert outcome.skipped == ["nope", "gone"]


def test_one_bad_entry_does_not_change_the_others():
    good = [_scenario("pricey"), _scenario("mid")]
    alone = estimate_batch([PROVIDER], good).results
    mixed = estimate_batch([PROVIDER], [good[0], _scenario("nope"), good[1]]).results
    assert mixed == alone


def test_batch_metrics(metrics, registry):
    estimate_batch([PROVIDER], [_scenario("mid"), _scenario("nope")], metrics=metrics)
    assert registry.get_sample_value("modelscout_cost_estimates_total") == 1.0
    assert registry.get_sample_value("modelscout_batch_skipped_total") == 1.0


def test_compare_models():
    request = CompareRequest(models=["pricey", "cheap", "ghost"], input_tokens=1000, output_tokens=1000)
    outcome = compare_models([PROVIDER], request)
    assert [r.model for r in outcome.results] == ["Cheap", "Pricey"]
    assert outcome.skipped == ["ghost"]


class TestParsing:
    def test_valid_records(self):
        scenarios = parse_scenarios([
            {"model": "cheap", "input_tokens": 10, "output_tokens": 5},
            {"model": "mid", "input_tokens": 10, "output_tokens": 5, "cached_ratio": 0.5, "note": "ignored"},
        ])
        assert [s.cached_ratio for s in scenarios] == [0.0, 0.5]

    def test_not_a_list_is_structural(self):
        with pytest.raises(InvalidScenarioError) as exc_info:
            parse_scenarios({"model": "cheap"})
        assert exc_info.value.structural

    def test_bad_record_names_index_and_field(self):
        with pytest.raises(InvalidScenarioError, match="record 1: cached_ratio") as exc_info:
            parse_scenarios([
                {"model": "cheap", "input_tokens": 10, "output_tokens": 5},
                {"model": "mid", "input_tokens": 10, "output_tokens": 5, "cached_ratio": 2},
            ])
        assert not exc_info.value.structural

    def test_missing_field(self):
        with pytest.raises(InvalidScenarioError, match="output_tokens"):
            parse_scenarios([{"model": "cheap", "input_tokens": 10}])

    def test_non_object_record(self):
        with pytest.raises(InvalidScenarioError, match="record 0"):
            parse_scenarios(["cheap"])


class TestLoadBatchFile:
    def test_load(self, tmp_path):
        path = tmp_path / "batch.json"
        path.write_text(json.dumps([{"model": "cheap", "input_tokens": 1, "output_tokens": 2}]))
        assert load_batch_file(path)[0].output_tokens == 2

    def test_invalid_json_is_structural(self, tmp_path):
        path = tmp_path / "batch.json"
        path.write_text("[{")
        with pytest.raises(InvalidScenarioError) as exc_info:
            load_batch_file(path)
        assert exc_info.value.structural
        assert str(path) in str(exc_info.value)

    def test_missing_file_is_structural(self, tmp_path):
        with pytest.raises(InvalidScenarioError) as exc_info:
            load_batch_file(tmp_path / "missing.json")
        assert exc_info.value.structural
