"""Tests for config loading."""

import pytest
from pydantic import ValidationError

from modelscout.config import Settings


def test_defaults():
    s = Settings()
    assert s.catalog_url == "http://localhost:8080"
    assert s.catalog_providers_path == "/v2/providers"
    assert s.catalog_path is None
    assert s.search_limit == 10
    assert s.wizard_preview_limit == 5
    assert s.wizard_detail_limit == 3
    assert s.search_scoring_policy == "simple"
    assert s.wizard_scoring_policy == "requirements"
    assert s.default_output_format == "table"


def test_override():
    s = Settings(catalog_url="http://custom:9090", log_level="DEBUG")
    assert s.catalog_url == "http://custom:9090"
    assert s.log_level == "DEBUG"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("MODELSCOUT_SEARCH_LIMIT", "3")
    monkeypatch.setenv("MODELSCOUT_CATALOG_PATH", "/tmp/catalog.yaml")
    s = Settings()
    assert s.search_limit == 3
    assert s.catalog_path == "/tmp/catalog.yaml"


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(ValidationError):
        s.search_limit = 20
