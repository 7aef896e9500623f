"""Shared fixtures: a small in-memory catalog and an app wired to the fixture file."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from modelscout.app import create_app
from modelscout.catalog.types import Model, Provider
from modelscout.observability.metrics import Metrics

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def catalog_path() -> Path:
    return FIXTURES / "catalog.yaml"


@pytest.fixture
def providers() -> list[Provider]:
    openai = Provider(
        id="openai",
        name="OpenAI",
        type="openai",
        api_endpoint="https://api.openai.com/v1",
        default_large_model_id="gpt-4o",
        models=(
            Model(id="gpt-4o", name="GPT-4o", cost_per_1m_in=2.5, cost_per_1m_out=10.0,
                  cost_per_1m_in_cached=1.25, context_window=128_000, supports_images=True),
            Model(id="gpt-4o-mini", name="GPT-4o Mini", cost_per_1m_in=0.15, cost_per_1m_out=0.6,
                  context_window=128_000, supports_images=True),
        ),
    )
    anthropic = Provider(
        id="anthropic",
        name="Anthropic",
        type="anthropic",
        api_endpoint="https://api.anthropic.com/v1",
        default_large_model_id="claude-sonnet-4",
        models=(
            Model(id="claude-sonnet-4", name="Claude Sonnet 4", cost_per_1m_in=3.0, cost_per_1m_out=15.0,
                  cost_per_1m_in_cached=0.3, context_window=200_000, can_reason=True, supports_images=True),
        ),
    )
    return [openai, anthropic]


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def metrics(registry) -> Metrics:
    return Metrics(registry)


@pytest.fixture
def app(catalog_path, registry):
    return create_app(
        settings_override={"catalog_path": str(catalog_path), "log_level": "WARNING"},
        metrics_registry=registry,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
