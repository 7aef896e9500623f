"""Provider and per-provider model listings."""

from __future__ import annotations

from modelscout.catalog.types import Model, Provider
from modelscout.errors import UnsupportedOutputModeError

SORT_KEYS = ("name", "cost", "context")


def list_providers(providers: list[Provider], provider_type: str | None = None) -> list[Provider]:
    """Providers sorted by display name, optionally restricted to one type tag."""
    if provider_type:
        providers = [p for p in providers if p.type.lower() == provider_type.lower()]
    return sorted(providers, key=lambda p: p.name)


def filter_models(models: tuple[Model, ...] | list[Model], reasoning: bool = False, vision: bool = False) -> list[Model]:
    return [
        m
        for m in models
        if (not reasoning or m.can_reason) and (not vision or m.supports_images)
    ]


def sort_models(models: list[Model], sort_by: str = "name") -> list[Model]:
    key = sort_by.lower()
    if key == "cost":
        return sorted(models, key=lambda m: m.cost_per_1m_in)
    if key == "context":
        return sorted(models, key=lambda m: m.context_window, reverse=True)
    if key == "name":
        return sorted(models, key=lambda m: m.name)
    raise UnsupportedOutputModeError("sort", sort_by, SORT_KEYS)
