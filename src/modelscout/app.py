"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI
from prometheus_client import REGISTRY, CollectorRegistry

from modelscout import __version__
from modelscout.api.errors import register_exception_handlers
from modelscout.api.routes_costs import router as costs_router
from modelscout.api.routes_health import router as health_router
from modelscout.api.routes_models import router as models_router
from modelscout.catalog.client import CatalogSource
from modelscout.catalog.store import CatalogStore, build_source
from modelscout.config import Settings
from modelscout.errors import CatalogUnavailableError
from modelscout.middleware.request_id import RequestIDMiddleware
from modelscout.observability.logging import setup_logging
from modelscout.observability.metrics import Metrics, get_metrics

logger = logging.getLogger("modelscout.app")


def create_app(
    settings_override: dict[str, Any] | None = None,
    catalog_source: CatalogSource | None = None,
    metrics_registry: CollectorRegistry | None = None,
) -> FastAPI:
    settings = Settings(**(settings_override or {}))
    setup_logging(settings.log_level)

    registry = metrics_registry or REGISTRY
    metrics = Metrics(registry) if metrics_registry is not None else get_metrics()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # --- Startup ---
        store = CatalogStore(
            catalog_source or build_source(settings),
            metrics=metrics,
            max_age=settings.catalog_max_age,
        )
        try:
            store.refresh()
        except CatalogUnavailableError as exc:
            # requests retry the fetch and answer 503 until it succeeds
            logger.warning("Catalog unavailable at startup: %s", exc)
        app.state.catalog = store

        logger.info(
            "modelscout v%s started, catalog=%s",
            __version__,
            settings.catalog_path or settings.catalog_url,
        )
        yield

    app = FastAPI(title="modelscout", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.metrics = metrics
    app.state.metrics_registry = registry

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    # Routes
    app.include_router(health_router)
    app.include_router(models_router)
    app.include_router(costs_router)

    return app
