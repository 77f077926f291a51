"""Immutable in-memory catalog of playable items."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Sequence

from .errors import ConfigurationError
from .models import ContentItem

logger = logging.getLogger(__name__)


class CatalogStore:
    """Read-only catalog grouped by category with identifier lookup.

    The store is built once and never mutated afterwards, so any number of
    readers may share it without coordination.
    """

    __slots__ = ("_items", "_by_id", "_by_category", "_categories")

    def __init__(
        self,
        items: Iterable[ContentItem],
        *,
        categories: Sequence[str] | None = None,
    ) -> None:
        ordered = tuple(items)
        declared = tuple(categories) if categories is not None else _categories_from(ordered)
        if len(set(declared)) != len(declared):
            raise ConfigurationError("Catalog declares the same category more than once")

        by_id: dict[str, ContentItem] = {}
        grouped: dict[str, list[ContentItem]] = {name: [] for name in declared}
        for item in ordered:
            if item.id in by_id:
                raise ConfigurationError(f"Duplicate content id {item.id!r}")
            if item.category not in grouped:
                raise ConfigurationError(
                    f"Content {item.id!r} uses unknown category {item.category!r}"
                )
            by_id[item.id] = item
            grouped[item.category].append(item)

        self._items = ordered
        self._by_id = MappingProxyType(by_id)
        self._by_category = MappingProxyType(
            {name: tuple(members) for name, members in grouped.items()}
        )
        self._categories = declared
        logger.debug("Catalog built with %d items in %d categories", len(ordered), len(declared))

    @property
    def categories(self) -> tuple[str, ...]:
        """Configured category names in declaration order."""

        return self._categories

    def all(self) -> tuple[ContentItem, ...]:
        """Return every item in insertion order."""

        return self._items

    def by_category(self, category: str) -> tuple[ContentItem, ...]:
        """Return the items of one category, empty when it has none."""

        return self._by_category.get(category, ())

    def find_by_id(self, item_id: object) -> ContentItem | None:
        """Return the item with the given identifier, or ``None``."""

        if not isinstance(item_id, str):
            return None
        return self._by_id.get(item_id)

    def __len__(self) -> int:
        return len(self._items)


def _categories_from(items: Sequence[ContentItem]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item.category, None)
    return tuple(seen)
