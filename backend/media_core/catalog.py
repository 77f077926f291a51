"""
Helpers for loading the static catalog JSON into a :class:`CatalogStore`.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .catalog_store import CatalogStore
from .errors import ConfigurationError
from .models import ContentItem

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).with_name("data") / "catalog.json"


class CatalogDocument(BaseModel):
    """Shape of the static catalog configuration document."""

    categories: list[str] | None = Field(
        default=None, description="Category names in display order."
    )
    items: list[ContentItem] = Field(default_factory=list)


def parse_catalog(data: Any) -> CatalogStore:
    """Validate raw configuration data and build the catalog from it.

    ``data`` is either a document with ``categories`` and ``items`` keys or a
    bare list of item records.
    """

    if isinstance(data, list):
        data = {"items": data}
    try:
        document = CatalogDocument.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid catalog configuration: {exc}") from exc
    return CatalogStore(document.items, categories=document.categories)


def load_catalog(path: Path | str | None = None) -> CatalogStore:
    """Read a catalog JSON file, falling back to the bundled catalog."""

    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read catalog {catalog_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Catalog {catalog_path} is not valid JSON: {exc}") from exc

    store = parse_catalog(data)
    logger.info(
        "Loaded %d catalog items in %d categories from %s",
        len(store),
        len(store.categories),
        catalog_path,
    )
    return store
