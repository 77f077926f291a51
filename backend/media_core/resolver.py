"""Identifier-to-record lookup used by routing."""
from __future__ import annotations

from .catalog_store import CatalogStore
from .models import ContentItem, NotFound


class ContentResolver:
    """Map a routing identifier to a catalog record or :class:`NotFound`."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def resolve(self, item_id: object) -> ContentItem | NotFound:
        """Return the record for ``item_id``.

        Empty, malformed and unassigned identifiers all produce the same
        :class:`NotFound` result.
        """

        item = self._store.find_by_id(item_id)
        if item is None:
            return NotFound(item_id=item_id)
        return item
