"""Record types shared by the catalog, resolver and playback layers."""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class ContentItem(BaseModel):
    """One playable catalog entry.

    Attributes use snake_case in Python and serialize to the camelCase wire
    shape consumed by the rendering layer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    id: str = Field(..., min_length=1, description="Catalog-wide unique identifier.")
    title: str = Field(..., description="Display title.")
    category: str = Field(..., min_length=1, description="Configured category name.")
    thumbnail_url: str = Field(..., alias="thumbnailUrl", description="Image reference.")
    media_url: str = Field(..., alias="mediaUrl", description="Playable media reference.")

    def to_wire(self) -> dict[str, str]:
        """Return the record in its external wire shape."""

        return self.model_dump(by_alias=True)


@dataclass(frozen=True, slots=True)
class NotFound:
    """Resolver result for identifiers that map to no configured item."""

    item_id: object
