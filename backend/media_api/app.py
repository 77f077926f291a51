"""Application factory for the Mediashelf API."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.media_core import CatalogStore, ConfigurationError

from .errors import register_exception_handlers
from .routers import catalog, config, health, players, search
from .settings import MediaSettings
from .state import AppState

logger = logging.getLogger(__name__)


def create_app(
    settings: MediaSettings | None = None, *, catalog_store: CatalogStore | None = None
) -> FastAPI:
    """Build and configure the FastAPI application.

    Raises :class:`ConfigurationError` when the static catalog is inconsistent;
    the service must not start with a broken catalog.
    """

    resolved_settings = settings or MediaSettings()
    try:
        app_state = AppState(settings=resolved_settings, catalog=catalog_store)
    except ConfigurationError:
        logger.error("Refusing to start with an invalid catalog", exc_info=True)
        raise

    app = FastAPI(title="Mediashelf API", version="0.1.0")
    app.state.app_state = app_state
    app.state.settings = app_state.settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (
        health.router,
        config.router,
        catalog.router,
        search.router,
        players.router,
    ):
        app.include_router(router)

    return app
