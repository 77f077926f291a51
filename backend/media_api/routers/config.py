"""Configuration endpoints."""
from fastapi import APIRouter, Depends

from ..dependencies import get_settings
from ..schemas import PresentationConfigModel
from ..settings import MediaSettings

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/presentation", response_model=PresentationConfigModel)
def read_presentation_config(
    settings: MediaSettings = Depends(get_settings),
) -> PresentationConfigModel:
    """Return the fallback values used by the rendering layer."""
    return PresentationConfigModel(placeholder_thumbnail_url=settings.placeholder_thumbnail_url)
