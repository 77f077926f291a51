"""In-memory registry of mounted playback controllers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from uuid import uuid4

from backend.media_core import (
    ContentItem,
    LifecycleEvent,
    LoadRequest,
    PlaybackController,
    PlaybackSession,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 256


class PlayerSessionNotFoundError(LookupError):
    """Raised when a player session id is not registered."""


class PlayerActionRejectedError(RuntimeError):
    """Raised when a user action does not apply to the player's current state."""


@dataclass(slots=True)
class PlayerHandle:
    """A mounted controller and the load request it most recently issued."""

    session_id: str
    content_id: str
    controller: PlaybackController
    last_request: LoadRequest | None = None

    def view(self) -> PlayerView:
        return PlayerView(
            session_id=self.session_id,
            content_id=self.content_id,
            session=self.controller.snapshot(),
            last_request=self.last_request,
        )


@dataclass(frozen=True, slots=True)
class PlayerView:
    """Immutable picture of a player taken while the registry lock is held."""

    session_id: str
    content_id: str
    session: PlaybackSession
    last_request: LoadRequest | None


class PlayerRegistry:
    """Thread-safe map of session ids to player controllers.

    Each controller owns its session state; the registry serializes the
    threadpool-dispatched requests that drive them and returns views captured
    under its lock. Once ``max_sessions`` players are open, opening another
    unmounts the oldest one.
    """

    def __init__(self, *, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._lock = Lock()
        self._players: dict[str, PlayerHandle] = {}
        self._max_sessions = max_sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)

    def open(self, item: ContentItem) -> PlayerView:
        """Mount a fresh controller for ``item`` and register it."""

        controller = PlaybackController(item.media_url)
        handle = PlayerHandle(session_id=uuid4().hex, content_id=item.id, controller=controller)
        with self._lock:
            handle.last_request = controller.mount()
            evicted = self._evict_oldest()
            self._players[handle.session_id] = handle
            view = handle.view()
        for stale in evicted:
            logger.info("Evicting player %s to stay within the session limit", stale.session_id)
            stale.controller.unmount()
        logger.debug("Opened player %s for %s", handle.session_id, item.id)
        return view

    def get(self, session_id: str) -> PlayerView:
        """Return the current view of ``session_id``."""

        with self._lock:
            return self._require(session_id).view()

    def apply_event(self, session_id: str, event: LifecycleEvent) -> tuple[bool, PlayerView]:
        """Deliver a lifecycle event and report whether it was applied."""

        with self._lock:
            handle = self._require(session_id)
            applied = handle.controller.handle(event)
            return applied, handle.view()

    def play(self, session_id: str) -> PlayerView:
        with self._lock:
            handle = self._require(session_id)
            if not handle.controller.play():
                raise PlayerActionRejectedError(
                    f"Cannot play while {handle.controller.state.value}"
                )
            return handle.view()

    def pause(self, session_id: str) -> PlayerView:
        with self._lock:
            handle = self._require(session_id)
            if not handle.controller.pause():
                raise PlayerActionRejectedError(
                    f"Cannot pause while {handle.controller.state.value}"
                )
            return handle.view()

    def retry(self, session_id: str, fallback_url: str | None = None) -> PlayerView:
        """Re-issue the player's load, optionally against ``fallback_url``."""

        with self._lock:
            handle = self._require(session_id)
            request = handle.controller.retry(fallback_url)
            if request is None:
                raise PlayerActionRejectedError(
                    f"Cannot retry while {handle.controller.state.value}"
                )
            handle.last_request = request
            return handle.view()

    def update_attributes(
        self,
        session_id: str,
        *,
        volume: float | None = None,
        position: float | None = None,
    ) -> PlayerView:
        """Change volume and position without a state transition."""

        with self._lock:
            handle = self._require(session_id)
            controller = handle.controller
            if volume is not None and not controller.set_volume(volume):
                raise PlayerActionRejectedError(f"Cannot set volume to {volume!r}")
            if position is not None and not controller.seek(position):
                raise PlayerActionRejectedError(f"Cannot seek to {position!r}")
            return handle.view()

    def close(self, session_id: str) -> None:
        """Unmount and forget the player."""

        with self._lock:
            handle = self._players.pop(session_id, None)
        if handle is None:
            raise PlayerSessionNotFoundError(f"Player session {session_id!r} not found")
        handle.controller.unmount()
        logger.debug("Closed player %s", session_id)

    def _evict_oldest(self) -> list[PlayerHandle]:
        evicted: list[PlayerHandle] = []
        while len(self._players) >= self._max_sessions:
            oldest = next(iter(self._players))
            evicted.append(self._players.pop(oldest))
        return evicted

    def _require(self, session_id: str) -> PlayerHandle:
        handle = self._players.get(session_id)
        if handle is None:
            raise PlayerSessionNotFoundError(f"Player session {session_id!r} not found")
        return handle
