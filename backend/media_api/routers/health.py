"""Health endpoints."""
from fastapi import APIRouter, Depends

from backend.media_core import CatalogStore

from ..dependencies import get_catalog
from ..schemas import CatalogHealthStatus, HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def get_health(catalog: CatalogStore = Depends(get_catalog)) -> HealthStatus:
    """Return service heartbeat information."""

    return HealthStatus(
        catalog=CatalogHealthStatus(items=len(catalog), categories=len(catalog.categories))
    )
