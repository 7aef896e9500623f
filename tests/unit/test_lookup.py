"""Tests for model and provider lookup."""

import pytest

from modelscout.catalog.lookup import find_model, find_models, find_provider, resolve_chat_model
from modelscout.catalog.types import Model, Provider
from modelscout.errors import NotFoundError


def test_exact_id_match(providers):
    model, provider = find_model(providers, "gpt-4o")
    assert model.id == "gpt-4o"
    assert provider.id == "openai"


def test_id_match_is_case_insensitive(providers):
    model, _ = find_model(providers, "CLAUDE-SONNET-4")
    assert model.id == "claude-sonnet-4"


def test_name_substring_match(providers):
    model, provider = find_model(providers, "sonnet")
    assert model.id == "claude-sonnet-4"
    assert provider.name == "Anthropic"


def test_first_match_in_catalog_order_wins(providers):
    # "GPT-4o" contains "gpt-4" and comes before "GPT-4o Mini"
    model, _ = find_model(providers, "gpt-4")
    assert model.id == "gpt-4o"


def test_provider_restriction(providers):
    with pytest.raises(NotFoundError):
        find_model(providers, "gpt-4o", provider_id="anthropic")
    model, _ = find_model(providers, "gpt-4o", provider_id="OpenAI")
    assert model.id == "gpt-4o"


def test_not_found(providers):
    with pytest.raises(NotFoundError, match="Model not found: gemini"):
        find_model(providers, "gemini")


def test_empty_token_never_matches(providers):
    with pytest.raises(NotFoundError):
        find_model(providers, "  ")


def test_lookup_outcomes_are_counted(providers, metrics, registry):
    find_model(providers, "gpt-4o", metrics=metrics)
    with pytest.raises(NotFoundError):
        find_model(providers, "nope", metrics=metrics)
    assert registry.get_sample_value("modelscout_lookups_total", {"outcome": "found"}) == 1.0
    assert registry.get_sample_value("modelscout_lookups_total", {"outcome": "not_found"}) == 1.0


def test_find_provider(providers):
    assert find_provider(providers, "ANTHROPIC").name == "Anthropic"
    with pytest.raises(NotFoundError, match="Provider not found"):
        find_provider(providers, "mistral")


class TestResolveChatModel:
    def test_explicit_model(self, providers):
        assert resolve_chat_model(providers[0], "gpt-4o-mini").id == "gpt-4o-mini"

    def test_explicit_model_must_exist(self, providers):
        with pytest.raises(NotFoundError):
            resolve_chat_model(providers[0], "claude-sonnet-4")

    def test_default_large_model(self, providers):
        assert resolve_chat_model(providers[0]).id == "gpt-4o"

    def test_falls_back_to_first_model(self):
        provider = Provider(id="p", name="P", default_large_model_id="gone", models=(Model(id="a", name="A"),))
        assert resolve_chat_model(provider).id == "a"

    def test_provider_without_models(self):
        with pytest.raises(NotFoundError):
            resolve_chat_model(Provider(id="p", name="P"))


def test_find_models_keeps_order_and_reports_missing(providers):
    found, missing = find_models(providers, [" sonnet", "ghost", "", "gpt-4o-mini"])
    assert [m.id for m, _ in found] == ["claude-sonnet-4", "gpt-4o-mini"]
    assert missing == ["ghost"]
