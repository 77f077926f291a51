"""
Media core for Mediashelf.

This package bundles the immutable catalog, the title search filter, the
identifier resolver used by routing and the playback lifecycle controller.
"""
from .catalog import DEFAULT_CATALOG_PATH, load_catalog, parse_catalog
from .catalog_store import CatalogStore
from .errors import ConfigurationError
from .models import ContentItem, NotFound
from .playback import (
    LifecycleEvent,
    LoadRequest,
    MediaErrorKind,
    MediaFailed,
    MediaReady,
    PlaybackController,
    PlaybackSession,
    PlaybackState,
    translate_engine_event,
)
from .resolver import ContentResolver
from .search_index import SearchIndex, SearchResults

__all__ = [
    "CatalogStore",
    "ConfigurationError",
    "ContentItem",
    "ContentResolver",
    "DEFAULT_CATALOG_PATH",
    "LifecycleEvent",
    "LoadRequest",
    "MediaErrorKind",
    "MediaFailed",
    "MediaReady",
    "NotFound",
    "PlaybackController",
    "PlaybackSession",
    "PlaybackState",
    "SearchIndex",
    "SearchResults",
    "load_catalog",
    "parse_catalog",
    "translate_engine_event",
]
