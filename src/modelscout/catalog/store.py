"""In-memory catalog snapshot with conditional refresh."""

from __future__ import annotations

import logging
import time

from modelscout.catalog.client import CatalogClient, CatalogSource
from modelscout.catalog.file_source import FileCatalogSource
from modelscout.catalog.types import Provider
from modelscout.config import Settings
from modelscout.errors import CatalogUnavailableError
from modelscout.observability.metrics import Metrics

logger = logging.getLogger("modelscout.catalog.store")


def build_source(settings: Settings) -> CatalogSource:
    if settings.catalog_path:
        return FileCatalogSource(settings.catalog_path)
    return CatalogClient(
        settings.catalog_url,
        path=settings.catalog_providers_path,
        timeout=settings.catalog_timeout,
    )


class CatalogStore:
    """Holds the providers of the last successful fetch.

    ``refresh()`` sends the stored validator so an unchanged catalog is
    answered with "not modified" and the previous snapshot is kept.
    ``providers()`` refreshes lazily: on first use, and again once the
    snapshot is older than ``max_age`` seconds when one is given.
    """

    def __init__(self, source: CatalogSource, metrics: Metrics | None = None, max_age: float | None = None) -> None:
        self.source = source
        self.metrics = metrics
        self.max_age = max_age
        self._providers: tuple[Provider, ...] | None = None
        self._validator: str | None = None
        self._checked_at = 0.0

    @property
    def loaded(self) -> bool:
        return self._providers is not None

    @property
    def validator(self) -> str | None:
        return self._validator

    def refresh(self, force: bool = False) -> list[Provider]:
        validator = None if force or self._providers is None else self._validator

        start = time.monotonic()
        try:
            result = self.source.fetch(validator)
        except CatalogUnavailableError:
            self._record("error")
            raise
        finally:
            if self.metrics:
                self.metrics.catalog_fetch_latency.observe(time.monotonic() - start)

        self._checked_at = time.monotonic()
        if result.not_modified:
            if self._providers is None:
                self._record("error")
                raise CatalogUnavailableError("Catalog reported not modified but no snapshot is held")
            self._record("not_modified")
            logger.debug("Catalog unchanged, keeping %d providers", len(self._providers))
            return list(self._providers)

        self._providers = tuple(result.providers)
        self._validator = result.validator
        self._record("fetched")
        return list(self._providers)

    def providers(self) -> list[Provider]:
        if self._providers is None or self._stale():
            return self.refresh()
        return list(self._providers)

    def _stale(self) -> bool:
        return self.max_age is not None and time.monotonic() - self._checked_at >= self.max_age

    def _record(self, outcome: str) -> None:
        if self.metrics:
            self.metrics.catalog_fetches.labels(outcome=outcome).inc()
