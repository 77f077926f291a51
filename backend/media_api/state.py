"""Shared state container for the Mediashelf API."""
from __future__ import annotations

from dataclasses import dataclass

from backend.media_core import CatalogStore, ContentResolver, SearchIndex, load_catalog

from .services.players import PlayerRegistry
from .settings import MediaSettings


@dataclass(slots=True)
class AppState:
    """Encapsulates the catalog components and player sessions shared across routers."""

    settings: MediaSettings
    catalog: CatalogStore
    search_index: SearchIndex
    resolver: ContentResolver
    players: PlayerRegistry

    def __init__(self, settings: MediaSettings, catalog: CatalogStore | None = None) -> None:
        self.settings = settings
        self.catalog = catalog if catalog is not None else load_catalog(settings.catalog_path)
        self.search_index = SearchIndex(self.catalog)
        self.resolver = ContentResolver(self.catalog)
        self.players = PlayerRegistry(max_sessions=settings.max_player_sessions)
