"""Pydantic models exposed by the Mediashelf API."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from backend.media_core import ContentItem

from .services.players import PlayerView

PlaybackStateName = Literal["idle", "loading", "playing", "paused", "error"]
MediaErrorKindName = Literal["network_error", "decode_error", "unavailable_source", "unknown"]


class CatalogHealthStatus(BaseModel):
    """Summary of the loaded catalog."""

    items: int = Field(description="Number of configured content items.")
    categories: int = Field(description="Number of configured categories.")


class HealthStatus(BaseModel):
    """Service health payload."""

    status: Literal["ok"] = Field(default="ok")
    version: str = Field(default="0.1.0", description="Semantic version of the API service.")
    catalog: CatalogHealthStatus = Field(description="Size of the in-memory catalog.")


class CategoryRowModel(BaseModel):
    """One landing-page row: a category and its items in catalog order."""

    name: str
    items: list[ContentItem] = Field(default_factory=list)


class ContentNotFoundModel(BaseModel):
    """Body returned when a content identifier does not resolve."""

    detail: Literal["Content not found"] = Field(default="Content not found")
    id: str = Field(description="The identifier that was requested.")


class PresentationConfigModel(BaseModel):
    """Values the rendering layer needs for graceful fallbacks."""

    placeholder_thumbnail_url: str = Field(
        description="Generic image reference to show when a thumbnail fails to load."
    )


class LoadRequestModel(BaseModel):
    """A load attempt the media engine should start."""

    generation: int = Field(ge=1, description="Generation tag for events belonging to this load.")
    media_url: str = Field(description="Media location to load.")


class PlayerSessionModel(BaseModel):
    """Represents a mounted player and its current lifecycle state."""

    session_id: str
    content_id: str
    state: PlaybackStateName
    generation: int = Field(ge=0)
    error_kind: MediaErrorKindName | None = Field(
        default=None, description="Failure classification while in the error state."
    )
    media_url: str
    volume: float = Field(ge=0, le=1, allow_inf_nan=False)
    position: float = Field(ge=0, allow_inf_nan=False, description="Playback position in seconds.")
    load: LoadRequestModel | None = Field(
        default=None, description="Most recent load request issued to the media engine."
    )

    @classmethod
    def from_view(cls, view: PlayerView) -> "PlayerSessionModel":
        session = view.session
        load = None
        if view.last_request is not None:
            load = LoadRequestModel(
                generation=view.last_request.generation,
                media_url=view.last_request.media_url,
            )
        return cls(
            session_id=view.session_id,
            content_id=view.content_id,
            state=session.state.value,
            generation=session.generation,
            error_kind=session.error_kind.value if session.error_kind else None,
            media_url=session.media_url,
            volume=session.volume,
            position=session.position,
            load=load,
        )


class PlayerOpenRequest(BaseModel):
    """Payload used to mount a player for a catalog item."""

    content_id: str = Field(..., description="Identifier of the item to play.")


class PlayerEventRequest(BaseModel):
    """Lifecycle notification forwarded from the media engine."""

    type: str = Field(
        ..., description="Engine event name, e.g. ready, canplay or error."
    )
    generation: int = Field(..., ge=0, description="Generation tag of the load the event belongs to.")
    error_kind: str | None = Field(
        default=None, description="Failure classification for error events."
    )
    media_error_code: int | None = Field(
        default=None, description="HTML MediaError code (1-4) for error events."
    )
    detail: str | None = Field(default=None, description="Optional diagnostic message.")


class PlayerEventResult(BaseModel):
    """Outcome of delivering a lifecycle event."""

    applied: bool = Field(description="False when the event was stale or had no effect.")
    session: PlayerSessionModel


class PlayerRetryRequest(BaseModel):
    """Payload used when retrying a failed load."""

    fallback_url: str | None = Field(
        default=None, description="Alternate media location to load instead of the current one."
    )


class PlayerAttributesUpdate(BaseModel):
    """Continuous player attributes that change without a state transition."""

    volume: float | None = Field(default=None, ge=0, le=1, allow_inf_nan=False)
    position: float | None = Field(default=None, ge=0, allow_inf_nan=False)
