"""Service layer helpers for the Mediashelf API."""

from .players import (
    DEFAULT_MAX_SESSIONS,
    PlayerActionRejectedError,
    PlayerHandle,
    PlayerRegistry,
    PlayerSessionNotFoundError,
    PlayerView,
)

__all__ = [
    "DEFAULT_MAX_SESSIONS",
    "PlayerActionRejectedError",
    "PlayerHandle",
    "PlayerRegistry",
    "PlayerSessionNotFoundError",
    "PlayerView",
]
