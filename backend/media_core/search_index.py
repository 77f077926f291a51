"""Query-time title filter over the catalog."""
from __future__ import annotations

from typing import Callable, Iterator

from .catalog_store import CatalogStore
from .models import ContentItem

TitleMatcher = Callable[[str, ContentItem], bool]


def normalize(text: str | None) -> str:
    """Trim surrounding whitespace and lower-case ``text``."""

    return (text or "").strip().lower()


def substring_matcher(needle: str, item: ContentItem) -> bool:
    """Match when the normalized title contains the normalized query."""

    return needle in normalize(item.title)


class SearchResults:
    """Lazy, restartable view over the items matching one query.

    Each iteration rescans the catalog, so the view can be consumed any number
    of times and always yields the same items in catalog order.
    """

    __slots__ = ("_store", "_needle", "_category", "_matcher")

    def __init__(
        self,
        store: CatalogStore,
        needle: str,
        category: str | None,
        matcher: TitleMatcher,
    ) -> None:
        self._store = store
        self._needle = needle
        self._category = category
        self._matcher = matcher

    def __iter__(self) -> Iterator[ContentItem]:
        candidates = (
            self._store.all() if self._category is None else self._store.by_category(self._category)
        )
        for item in candidates:
            if not self._needle or self._matcher(self._needle, item):
                yield item

    def __repr__(self) -> str:
        return f"SearchResults(query={self._needle!r}, category={self._category!r})"


class SearchIndex:
    """Stable, unranked title filter over a :class:`CatalogStore`.

    The default matcher is a linear substring scan. A precomputed index can be
    supplied as ``matcher`` as long as it keeps the same matching semantics;
    ordering always follows the catalog.
    """

    def __init__(self, store: CatalogStore, *, matcher: TitleMatcher = substring_matcher) -> None:
        self._store = store
        self._matcher = matcher

    def search(self, query: str | None, *, category: str | None = None) -> SearchResults:
        """Return the items whose title contains ``query`` ignoring case.

        An empty or blank query matches every item. ``category`` restricts the
        candidates to one category.
        """

        return SearchResults(self._store, normalize(query), category, self._matcher)
