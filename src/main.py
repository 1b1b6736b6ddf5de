"""lifelog FastAPI application entry point.

Wires together all providers, services, and routes via dependency injection.
Loads configuration from the environment and ``.env``, configures structured
logging, and exposes the webhook and read API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.api.routes import webhook_router
from src.config.settings import Settings
from src.extractors import default_extractors
from src.pipeline.extraction import ExtractionPipeline
from src.pipeline.index_forwarder import IndexForwarder
from src.pipeline.orchestrator import IngestionOrchestrator
from src.providers.nutrition.nutritionix_provider import NutritionixProvider
from src.providers.search_index.operand_provider import OperandIndexProvider
from src.providers.storage.sqlite_log_store import SQLiteLogStore
from src.providers.telegram.telegram_file_provider import TelegramFileProvider
from src.services.log_query_service import LogQueryService
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(
    app_settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    Optional integrations whose credentials are empty are left out.
    """
    # -- Shared resources --
    http_client = http_client or httpx.AsyncClient(timeout=app_settings.http_timeout)
    log_store = SQLiteLogStore(db_path=app_settings.database_path)

    # -- Providers --
    file_provider = TelegramFileProvider(http_client=http_client, settings=app_settings)

    nutrition_provider: NutritionixProvider | None = None
    if app_settings.nutrition_configured():
        nutrition_provider = NutritionixProvider(http_client=http_client, settings=app_settings)
    else:
        _logger.info(
            "nutrition_disabled",
            reason="credentials not set",
            effect="food extractor left out; no ATE_OR_DRANK events",
        )

    index_provider: OperandIndexProvider | None = None
    if app_settings.indexing_configured():
        index_provider = OperandIndexProvider(http_client=http_client, settings=app_settings)
    else:
        _logger.info("indexing_disabled", reason="api key or collection not set")

    # -- Pipeline --
    extraction_pipeline = ExtractionPipeline(default_extractors(nutrition_provider))
    index_forwarder = IndexForwarder(
        index_provider=index_provider,
        collection_id=app_settings.operand_collection_id,
        frontend_url=app_settings.frontend_url,
    )
    orchestrator = IngestionOrchestrator(
        authorized_username=app_settings.telegram_username,
        file_provider=file_provider,
        log_store=log_store,
        extraction_pipeline=extraction_pipeline,
        index_forwarder=index_forwarder,
    )

    # -- Read side --
    query_service = LogQueryService(
        log_store=log_store,
        index_provider=index_provider,
        collection_id=app_settings.operand_collection_id,
    )

    provider_registry = {
        "telegram": bool(app_settings.telegram_bot_key and app_settings.telegram_username),
        "nutrition": nutrition_provider is not None,
        "search_index": index_forwarder.enabled,
        "storage": log_store.get_provider_name(),
        "extractors": [e.name for e in extraction_pipeline.extractors],
    }

    return {
        "http_client": http_client,
        "log_store": log_store,
        "orchestrator": orchestrator,
        "query_service": query_service,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to build components from.  Defaults to the module-level
        settings read from the environment.
    components:
        Pre-built components (as returned by ``_build_all``).  When given,
        nothing is built at startup.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise providers and storage on startup, clean up on shutdown."""
        built = components if components is not None else _build_all(app_settings)

        for key, value in built.items():
            setattr(application.state, key, value)

        await built["log_store"].initialize()

        _logger.info(
            "app_startup",
            version=_VERSION,
            environment=app_settings.app_env,
            providers=built.get("provider_registry", {}),
        )

        yield

        # -- Shutdown: close shared httpx client --
        http_client: httpx.AsyncClient | None = built.get("http_client")
        if http_client is not None:
            await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    application = FastAPI(
        title="lifelog API",
        version=_VERSION,
        description=(
            "Receive Telegram messages from one authorized user, store them as "
            "logs, extract wake/sleep/food events, and index them for search."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=[app_settings.frontend_url])

    # -- Routes --
    application.include_router(webhook_router)
    application.include_router(api_router)

    return application


app = create_app()


def run() -> None:
    """Serve ``src.main:app`` with uvicorn."""
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    run()
