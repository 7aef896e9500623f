"""Catalog source backed by a local YAML or JSON file."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

import yaml

from modelscout.catalog.client import CatalogFetch
from modelscout.catalog.types import parse_providers
from modelscout.errors import CatalogUnavailableError

logger = logging.getLogger("modelscout.catalog.file")


def content_validator(raw: bytes) -> str:
    return f'"{hashlib.sha256(raw).hexdigest()}"'


class FileCatalogSource:
    """Reads providers from ``path``; the validator is a digest of the file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch(self, validator: str | None = None) -> CatalogFetch:
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise CatalogUnavailableError(f"Catalog file not readable: {self.path} ({exc})") from exc

        digest = content_validator(raw)
        if validator is not None and validator == digest:
            return CatalogFetch(validator=validator, not_modified=True)

        try:
            if self.path.suffix.lower() == ".json":
                data = json.loads(raw)
            else:
                data = yaml.safe_load(raw) or []
            providers = parse_providers(data)
        except (ValueError, KeyError, TypeError, yaml.YAMLError) as exc:
            raise CatalogUnavailableError(f"Malformed catalog file {self.path}: {exc}") from exc

        logger.info("Loaded %d providers from %s", len(providers), self.path)
        return CatalogFetch(providers=providers, validator=digest)
