"""Search endpoint filtering the catalog by title."""
from fastapi import APIRouter, Depends, Query

from backend.media_core import ContentItem, SearchIndex

from ..dependencies import get_search_index

router = APIRouter(tags=["search"])


@router.get("/search", response_model=list[ContentItem])
def search_catalog(
    q: str = Query(default="", description="Case-insensitive title fragment; empty matches all."),
    category: str | None = Query(
        default=None, description="Restrict matching to a single category."
    ),
    index: SearchIndex = Depends(get_search_index),
) -> list[ContentItem]:
    """Return items whose title contains the query, in catalog order."""

    return list(index.search(q, category=category))
