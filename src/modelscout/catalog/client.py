"""HTTP client for the provider catalog service."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from modelscout.catalog.types import Provider, parse_providers
from modelscout.errors import CatalogUnavailableError

logger = logging.getLogger("modelscout.catalog")


@dataclass(frozen=True)
class CatalogFetch:
    providers: list[Provider] = field(default_factory=list)
    validator: str | None = None
    not_modified: bool = False


class CatalogSource(Protocol):
    def fetch(self, validator: str | None = None) -> CatalogFetch:
        ...


class CatalogClient:
    """Fetches providers from ``{base_url}{path}``.

    A validator is sent as ``If-None-Match``; a 304 answer yields a
    ``CatalogFetch`` with ``not_modified=True`` and no providers.
    """

    def __init__(
        self,
        base_url: str,
        path: str = "/v2/providers",
        timeout: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.timeout = timeout
        self._transport = transport

    def fetch(self, validator: str | None = None) -> CatalogFetch:
        headers = {"Accept": "application/json"}
        if validator:
            headers["If-None-Match"] = validator

        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=10.0),
                transport=self._transport,
            ) as client:
                resp = client.get(self.path, headers=headers)
        except httpx.HTTPError as exc:
            raise CatalogUnavailableError(f"Error fetching providers from {self.base_url}: {exc}") from exc

        if resp.status_code == 304:
            logger.info("Catalog not modified (validator=%s)", validator)
            return CatalogFetch(validator=validator, not_modified=True)

        if resp.status_code >= 400:
            raise CatalogUnavailableError(f"Catalog service returned HTTP {resp.status_code}")

        try:
            providers = parse_providers(resp.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise CatalogUnavailableError(f"Malformed catalog payload: {exc}") from exc

        logger.info("Fetched %d providers from %s", len(providers), self.base_url)
        return CatalogFetch(providers=providers, validator=resp.headers.get("ETag"))
