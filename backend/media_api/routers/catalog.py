"""Catalog endpoints for the landing and detail views."""
from fastapi import APIRouter, Depends, Query

from backend.media_core import CatalogStore, ContentItem, ContentResolver, NotFound

from ..dependencies import get_catalog, get_resolver
from ..errors import ContentNotFoundError
from ..schemas import CategoryRowModel, ContentNotFoundModel

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=list[ContentItem])
def list_catalog(
    category: str | None = Query(
        default=None, description="Restrict results to a single category."
    ),
    catalog: CatalogStore = Depends(get_catalog),
) -> list[ContentItem]:
    """Return catalog items in their configured order."""

    if category is None:
        return list(catalog.all())
    return list(catalog.by_category(category))


@router.get("/categories", response_model=list[CategoryRowModel])
def list_category_rows(catalog: CatalogStore = Depends(get_catalog)) -> list[CategoryRowModel]:
    """Return one row per configured category for the landing view."""

    return [
        CategoryRowModel(name=name, items=list(catalog.by_category(name)))
        for name in catalog.categories
    ]


@router.get(
    "/{item_id}",
    response_model=ContentItem,
    responses={404: {"model": ContentNotFoundModel}},
)
def get_catalog_item(
    item_id: str, resolver: ContentResolver = Depends(get_resolver)
) -> ContentItem:
    """Return a single item, answering 404 when the identifier does not resolve."""

    result = resolver.resolve(item_id)
    if isinstance(result, NotFound):
        raise ContentNotFoundError(result)
    return result
