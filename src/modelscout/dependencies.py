"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Request

from modelscout.catalog.store import CatalogStore
from modelscout.catalog.types import Provider
from modelscout.config import Settings
from modelscout.observability.metrics import Metrics


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_providers(request: Request) -> list[Provider]:
    return get_catalog(request).providers()


def get_app_metrics(request: Request) -> Metrics:
    return request.app.state.metrics
