"""Tests for the catalog snapshot store."""

import pytest

from modelscout.catalog.client import CatalogFetch, CatalogClient
from modelscout.catalog.file_source import FileCatalogSource
from modelscout.catalog.store import CatalogStore, build_source
from modelscout.catalog.types import Provider
from modelscout.config import Settings
from modelscout.errors import CatalogUnavailableError


class FakeSource:
    def __init__(self, *results):
        self.results = list(results)
        self.validators = []

    def fetch(self, validator=None):
        self.validators.append(validator)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _fetched(*ids, validator='"v1"'):
    return CatalogFetch(providers=[Provider(id=i, name=i) for i in ids], validator=validator)


def test_refresh_stores_snapshot_and_validator():
    store = CatalogStore(FakeSource(_fetched("a", "b")))
    assert not store.loaded
    providers = store.refresh()
    assert [p.id for p in providers] == ["a", "b"]
    assert store.loaded
    assert store.validator == '"v1"'


def test_not_modified_keeps_previous_snapshot():
    source = FakeSource(_fetched("a"), CatalogFetch(validator='"v1"', not_modified=True))
    store = CatalogStore(source)
    store.refresh()
    assert [p.id for p in store.refresh()] == ["a"]
    assert source.validators == [None, '"v1"']


def test_not_modified_without_snapshot_is_unavailable():
    store = CatalogStore(FakeSource(CatalogFetch(not_modified=True)))
    with pytest.raises(CatalogUnavailableError):
        store.refresh()


def test_force_refresh_sends_no_validator():
    source = FakeSource(_fetched("a"), _fetched("b", validator='"v2"'))
    store = CatalogStore(source)
    store.refresh()
    assert [p.id for p in store.refresh(force=True)] == ["b"]
    assert source.validators == [None, None]
    assert store.validator == '"v2"'


def test_unavailable_propagates(metrics, registry):
    store = CatalogStore(FakeSource(CatalogUnavailableError("down")), metrics=metrics)
    with pytest.raises(CatalogUnavailableError):
        store.providers()
    assert registry.get_sample_value("modelscout_catalog_fetches_total", {"outcome": "error"}) == 1.0


def test_providers_fetches_lazily_once():
    source = FakeSource(_fetched("a"))
    store = CatalogStore(source)
    store.providers()
    store.providers()
    assert source.validators == [None]


def test_stale_snapshot_is_revalidated():
    source = FakeSource(_fetched("a"), CatalogFetch(validator='"v1"', not_modified=True))
    store = CatalogStore(source, max_age=0)
    store.providers()
    assert [p.id for p in store.providers()] == ["a"]
    assert source.validators == [None, '"v1"']


def test_fetch_outcomes_are_counted(metrics, registry):
    source = FakeSource(_fetched("a"), CatalogFetch(validator='"v1"', not_modified=True))
    store = CatalogStore(source, metrics=metrics)
    store.refresh()
    store.refresh()
    assert registry.get_sample_value("modelscout_catalog_fetches_total", {"outcome": "fetched"}) == 1.0
    assert registry.get_sample_value("modelscout_catalog_fetches_total", {"outcome": "not_modified"}) == 1.0


def test_build_source_prefers_local_file(catalog_path):
    assert isinstance(build_source(Settings(catalog_path=str(catalog_path))), FileCatalogSource)
    assert isinstance(build_source(Settings()), CatalogClient)
