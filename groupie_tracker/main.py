"""Groupie tracker FastAPI application entry point.

Wires the catalog source, store, joiner, filter and search services and the
API routes together.  Loads configuration from ``.env`` and
``config/config.yaml``, configures structured logging, and fetches the
catalog once at startup.  When ``REFRESH_INTERVAL`` is positive a background
task re-fetches it on that period.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from groupie_tracker import __version__
from groupie_tracker.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from groupie_tracker.api.routes import router as api_router
from groupie_tracker.config.loader import load_config
from groupie_tracker.config.settings import Settings
from groupie_tracker.providers.catalog.http_catalog_source import HttpCatalogSource
from groupie_tracker.services.catalog_fetcher import CatalogFetcher
from groupie_tracker.services.catalog_service import CatalogService
from groupie_tracker.services.catalog_store import CatalogStore
from groupie_tracker.services.filter_service import FilterService
from groupie_tracker.services.joiner import PerformerJoiner
from groupie_tracker.services.search_service import DEFAULT_SUGGESTION_LIMIT, SearchService
from groupie_tracker.utils.errors import FetchError
from groupie_tracker.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    catalog_config = app_config.get("catalog", {})
    search_config = app_config.get("search", {})

    http_client = httpx.AsyncClient(timeout=app_settings.fetch_timeout)

    store = CatalogStore(join_mode=catalog_config.get("join_mode", "positional"))
    source = HttpCatalogSource(http_client=http_client, settings=app_settings)
    fetcher = CatalogFetcher(source=source, store=store)
    joiner = PerformerJoiner(store)
    filter_service = FilterService(store, joiner)
    search_service = SearchService(
        store,
        joiner,
        suggestion_limit=int(search_config.get("suggestion_limit", DEFAULT_SUGGESTION_LIMIT)),
    )
    catalog = CatalogService(
        store=store,
        fetcher=fetcher,
        joiner=joiner,
        filter_service=filter_service,
        search_service=search_service,
    )

    return {
        "http_client": http_client,
        "store": store,
        "fetcher": fetcher,
        "catalog": catalog,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Fetch the catalog on startup; stop refreshing and close the client on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    http_client: httpx.AsyncClient = components["http_client"]
    catalog: CatalogService = components["catalog"]

    try:
        report = await catalog.fetch_all()
    except FetchError as exc:
        _logger.error("catalog_load_failed", source=exc.source, error=exc.message)
        await http_client.aclose()
        raise

    refresh_task: asyncio.Task | None = None
    if settings.refresh_interval > 0:
        fetcher: CatalogFetcher = components["fetcher"]
        refresh_task = asyncio.create_task(fetcher.run_periodic(settings.refresh_interval))

    _logger.info(
        "app_startup",
        version=__version__,
        environment=settings.app_env,
        join_mode=catalog.store.join_mode.value,
        collections=report.counts(),
        refresh_interval=settings.refresh_interval,
    )

    try:
        yield
    finally:
        if refresh_task is not None:
            refresh_task.cancel()
            try:
                await refresh_task
            except asyncio.CancelledError:
                pass
            except Exception as exc:
                _logger.error("catalog_refresh_crashed", error=str(exc), error_type=type(exc).__name__)

        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Groupie Tracker API",
        version=__version__,
        description=(
            "Browse, filter and search a catalog of music performers joined "
            "with their concert venues and dates."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "groupie_tracker.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
