"""FastAPI dependencies for the Mediashelf API."""
from fastapi import Depends, Request

from backend.media_core import CatalogStore, ContentResolver, SearchIndex

from .services.players import PlayerRegistry
from .settings import MediaSettings
from .state import AppState


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_settings(app_state: AppState = Depends(get_app_state)) -> MediaSettings:
    """Return the settings the application was built with."""
    return app_state.settings


def get_catalog(app_state: AppState = Depends(get_app_state)) -> CatalogStore:
    """Return the immutable catalog store."""
    return app_state.catalog


def get_search_index(app_state: AppState = Depends(get_app_state)) -> SearchIndex:
    """Return the catalog search index."""
    return app_state.search_index


def get_resolver(app_state: AppState = Depends(get_app_state)) -> ContentResolver:
    """Return the content resolver used by detail routes."""
    return app_state.resolver


def get_player_registry(app_state: AppState = Depends(get_app_state)) -> PlayerRegistry:
    """Return the registry of mounted players."""
    return app_state.players
