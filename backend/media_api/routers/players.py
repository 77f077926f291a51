"""Player session endpoints driving playback controllers."""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from backend.media_core import ContentResolver, NotFound, translate_engine_event

from ..dependencies import get_player_registry, get_resolver
from ..errors import ContentNotFoundError
from ..schemas import (
    ContentNotFoundModel,
    PlayerAttributesUpdate,
    PlayerEventRequest,
    PlayerEventResult,
    PlayerOpenRequest,
    PlayerRetryRequest,
    PlayerSessionModel,
)
from ..services.players import (
    PlayerActionRejectedError,
    PlayerRegistry,
    PlayerSessionNotFoundError,
)

router = APIRouter(prefix="/players", tags=["players"])


@router.post(
    "",
    response_model=PlayerSessionModel,
    status_code=201,
    responses={404: {"model": ContentNotFoundModel}},
)
def open_player(
    request: PlayerOpenRequest,
    resolver: ContentResolver = Depends(get_resolver),
    registry: PlayerRegistry = Depends(get_player_registry),
) -> PlayerSessionModel:
    """Resolve a catalog item and mount a new player for its media."""

    result = resolver.resolve(request.content_id)
    if isinstance(result, NotFound):
        raise ContentNotFoundError(result)
    return PlayerSessionModel.from_view(registry.open(result))


@router.get("/{session_id}", response_model=PlayerSessionModel)
def get_player(
    session_id: str, registry: PlayerRegistry = Depends(get_player_registry)
) -> PlayerSessionModel:
    """Return the current state of a mounted player."""

    try:
        return PlayerSessionModel.from_view(registry.get(session_id))
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc


@router.post("/{session_id}/events", response_model=PlayerEventResult)
def deliver_event(
    session_id: str,
    request: PlayerEventRequest,
    registry: PlayerRegistry = Depends(get_player_registry),
) -> PlayerEventResult:
    """Apply a media engine notification; stale generations are discarded."""

    try:
        event = translate_engine_event(
            request.type,
            request.generation,
            error_code=request.media_error_code,
            error_kind=request.error_kind,
            detail=request.detail,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        applied, view = registry.apply_event(session_id, event)
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc
    return PlayerEventResult(applied=applied, session=PlayerSessionModel.from_view(view))


@router.post("/{session_id}/play", response_model=PlayerSessionModel)
def play(
    session_id: str, registry: PlayerRegistry = Depends(get_player_registry)
) -> PlayerSessionModel:
    """Resume playback of a paused player."""

    try:
        return PlayerSessionModel.from_view(registry.play(session_id))
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc
    except PlayerActionRejectedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{session_id}/pause", response_model=PlayerSessionModel)
def pause(
    session_id: str, registry: PlayerRegistry = Depends(get_player_registry)
) -> PlayerSessionModel:
    """Pause a playing player."""

    try:
        return PlayerSessionModel.from_view(registry.pause(session_id))
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc
    except PlayerActionRejectedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{session_id}/retry", response_model=PlayerSessionModel)
def retry(
    session_id: str,
    request: PlayerRetryRequest | None = Body(default=None),
    registry: PlayerRegistry = Depends(get_player_registry),
) -> PlayerSessionModel:
    """Re-issue the load under a new generation."""

    fallback_url = request.fallback_url if request else None
    try:
        return PlayerSessionModel.from_view(registry.retry(session_id, fallback_url))
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc
    except PlayerActionRejectedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.put("/{session_id}/attributes", response_model=PlayerSessionModel)
def update_attributes(
    session_id: str,
    update: PlayerAttributesUpdate,
    registry: PlayerRegistry = Depends(get_player_registry),
) -> PlayerSessionModel:
    """Change volume or position without a state transition."""

    try:
        view = registry.update_attributes(
            session_id, volume=update.volume, position=update.position
        )
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc
    except PlayerActionRejectedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return PlayerSessionModel.from_view(view)


@router.delete("/{session_id}", status_code=204)
def close_player(
    session_id: str, registry: PlayerRegistry = Depends(get_player_registry)
) -> Response:
    """Unmount a player and discard its session."""

    try:
        registry.close(session_id)
    except PlayerSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Player session not found") from exc
    return Response(status_code=204)
