"""Resolve free-text tokens to providers and models.

Lookup walks providers in catalog order and models in list order and
returns the first hit, so catalog ordering decides between ambiguous
matches.
"""

from __future__ import annotations

import logging

from modelscout.catalog.types import Model, Provider
from modelscout.errors import NotFoundError
from modelscout.observability.metrics import Metrics

logger = logging.getLogger("modelscout.catalog.lookup")


def model_matches(model: Model, token: str) -> bool:
    needle = token.lower()
    return model.id.lower() == needle or needle in model.name.lower()


def find_model(
    providers: list[Provider],
    token: str,
    provider_id: str | None = None,
    metrics: Metrics | None = None,
) -> tuple[Model, Provider]:
    """Return the first ``(model, provider)`` whose id equals ``token`` or
    whose display name contains it, both case-insensitively.

    ``provider_id`` restricts the scan to that provider.  Raises
    ``NotFoundError`` when nothing matches.
    """
    token = token.strip()
    if token:
        for provider in providers:
            if provider_id and provider.id.lower() != provider_id.lower():
                continue
            for model in provider.models:
                if model_matches(model, token):
                    if metrics:
                        metrics.lookups.labels(outcome="found").inc()
                    return model, provider

    if metrics:
        metrics.lookups.labels(outcome="not_found").inc()
    raise NotFoundError("model", token)


def find_provider(providers: list[Provider], provider_id: str) -> Provider:
    for provider in providers:
        if provider.id.lower() == provider_id.strip().lower():
            return provider
    raise NotFoundError("provider", provider_id)


def resolve_chat_model(provider: Provider, model_id: str | None = None) -> Model:
    """Pick the model a chat session talks to.

    An explicit id must name one of the provider's models.  Without one the
    provider's default large model is used, then its first model.
    """
    if model_id:
        for model in provider.models:
            if model.id.lower() == model_id.lower():
                return model
        raise NotFoundError("model", model_id)

    for model in provider.models:
        if model.id == provider.default_large_model_id:
            return model
    if provider.models:
        logger.debug("Default model %r not listed for %s, using first model", provider.default_large_model_id, provider.id)
        return provider.models[0]
    raise NotFoundError("model", f"{provider.id} (provider has no models)")


def find_models(providers: list[Provider], tokens: list[str]) -> tuple[list[tuple[Model, Provider]], list[str]]:
    """Resolve each non-blank token with ``find_model``.

    Returns the resolved pairs in token order and the tokens that matched
    nothing.
    """
    found: list[tuple[Model, Provider]] = []
    missing: list[str] = []
    for token in tokens:
        token = token.strip()
        if not token:
            continue
        try:
            found.append(find_model(providers, token))
        except NotFoundError:
            missing.append(token)
    return found, missing
