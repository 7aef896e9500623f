"""Prometheus metrics registration."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY


def _safe_counter(name: str, desc: str, registry: CollectorRegistry, labelnames: tuple[str, ...] = ()) -> Counter:
    try:
        return Counter(name, desc, labelnames=labelnames, registry=registry)
    except ValueError:
        return registry._names_to_collectors.get(name + "_total") or registry._names_to_collectors[name]


def _safe_histogram(name: str, desc: str, registry: CollectorRegistry, labelnames: tuple[str, ...] = ()) -> Histogram:
    try:
        return Histogram(name, desc, labelnames=labelnames, registry=registry)
    except ValueError:
        return registry._names_to_collectors[name]


class Metrics:
    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        reg = registry or REGISTRY
        self.catalog_fetches = _safe_counter("modelscout_catalog_fetches_total", "Catalog fetches by outcome", reg, labelnames=("outcome",))
        self.catalog_fetch_latency = _safe_histogram("modelscout_catalog_fetch_latency_seconds", "Catalog fetch latency", reg)
        self.lookups = _safe_counter("modelscout_lookups_total", "Model lookups by outcome", reg, labelnames=("outcome",))
        self.cost_estimates = _safe_counter("modelscout_cost_estimates_total", "Cost results produced", reg)
        self.batch_skipped = _safe_counter("modelscout_batch_skipped_total", "Batch or comparison entries skipped as not found", reg)
        self.wizard_sessions = _safe_counter("modelscout_wizard_sessions_total", "Wizard sessions by outcome", reg, labelnames=("outcome",))
        self.chat_exchanges = _safe_counter("modelscout_chat_exchanges_total", "Chat exchanges by outcome", reg, labelnames=("outcome",))
        self.chat_tokens = _safe_counter("modelscout_chat_tokens_total", "Tokens consumed by chat sessions", reg, labelnames=("direction",))
        self.requests_total = _safe_counter("modelscout_requests_total", "HTTP requests", reg)
        self.request_errors_total = _safe_counter("modelscout_request_errors_total", "HTTP error responses", reg, labelnames=("code",))


_metrics: Metrics | None = None


def get_metrics(registry: CollectorRegistry | None = None) -> Metrics:
    global _metrics
    if _metrics is None:
        _metrics = Metrics(registry)
    return _metrics
