"""Playback lifecycle controller for a single media element."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, Union

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    """Discrete states of a mounted player."""

    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    ERROR = "error"


class MediaErrorKind(str, Enum):
    """Classification of media load failures shown to the viewer."""

    NETWORK = "network_error"
    DECODE = "decode_error"
    UNAVAILABLE_SOURCE = "unavailable_source"
    UNKNOWN = "unknown"


# HTML MediaError codes: 1 aborted, 2 network, 3 decode, 4 source not supported.
MEDIA_ERROR_CODES: dict[int, MediaErrorKind] = {
    1: MediaErrorKind.UNKNOWN,
    2: MediaErrorKind.NETWORK,
    3: MediaErrorKind.DECODE,
    4: MediaErrorKind.UNAVAILABLE_SOURCE,
}

READY_EVENT_NAMES = frozenset({"ready", "canplay", "canplaythrough", "loadeddata"})
FAILURE_EVENT_NAMES = frozenset({"error", "failed"})


@dataclass(frozen=True, slots=True)
class LoadRequest:
    """A load attempt handed to the media engine, tagged with its generation."""

    generation: int
    media_url: str


@dataclass(frozen=True, slots=True)
class MediaReady:
    """The engine can start playing the load tagged ``generation``."""

    generation: int


@dataclass(frozen=True, slots=True)
class MediaFailed:
    """The load tagged ``generation`` failed."""

    generation: int
    kind: MediaErrorKind = MediaErrorKind.UNKNOWN
    detail: str | None = None


LifecycleEvent = Union[MediaReady, MediaFailed]


@dataclass(frozen=True, slots=True)
class PlaybackSession:
    """Point-in-time view of a controller handed to renderers."""

    state: PlaybackState
    generation: int
    error_kind: MediaErrorKind | None
    media_url: str
    volume: float
    position: float


class MediaEngine(Protocol):
    """Anything able to start loading a media location."""

    def load(self, request: LoadRequest) -> None:
        ...


StateListener = Callable[[PlaybackSession], None]


def translate_engine_event(
    name: str,
    generation: int,
    *,
    error_code: int | None = None,
    error_kind: str | None = None,
    detail: str | None = None,
) -> LifecycleEvent:
    """Convert a raw engine notification into a lifecycle event.

    ``error_kind`` takes precedence over ``error_code``; unknown values map to
    :attr:`MediaErrorKind.UNKNOWN`. Raises ``ValueError`` for notification
    names that are neither ready nor failure signals.
    """

    normalized = name.strip().lower()
    if normalized in READY_EVENT_NAMES:
        return MediaReady(generation=generation)
    if normalized in FAILURE_EVENT_NAMES:
        kind = MediaErrorKind.UNKNOWN
        if error_kind is not None:
            try:
                kind = MediaErrorKind(error_kind)
            except ValueError:
                kind = MediaErrorKind.UNKNOWN
        elif error_code is not None:
            kind = MEDIA_ERROR_CODES.get(error_code, MediaErrorKind.UNKNOWN)
        return MediaFailed(generation=generation, kind=kind, detail=detail)
    raise ValueError(f"Unsupported engine event {name!r}")


class PlaybackController:
    """Finite-state machine driving one media element.

    Every load attempt carries a generation number. Ready and failure events
    whose generation differs from the current one belong to a superseded load
    and are discarded. Listeners registered with :meth:`subscribe` receive a
    fresh :class:`PlaybackSession` synchronously on every change; a listener that
    raises is logged and does not keep the others from being called.
    """

    def __init__(self, media_url: str, *, engine: MediaEngine | None = None) -> None:
        self._media_url = media_url
        self._engine = engine
        self._state = PlaybackState.IDLE
        self._generation = 0
        self._error_kind: MediaErrorKind | None = None
        self._volume = 1.0
        self._position = 0.0
        self._mounted = False
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # Read access

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def error_kind(self) -> MediaErrorKind | None:
        return self._error_kind

    @property
    def media_url(self) -> str:
        return self._media_url

    @property
    def mounted(self) -> bool:
        return self._mounted

    def snapshot(self) -> PlaybackSession:
        """Return the current session values."""

        return PlaybackSession(
            state=self._state,
            generation=self._generation,
            error_kind=self._error_kind,
            media_url=self._media_url,
            volume=self._volume,
            position=self._position,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle

    def mount(self) -> LoadRequest:
        """Start loading the media location; re-mounting supersedes any load."""

        return self._begin_load(self._media_url)

    def retry(self, fallback_url: str | None = None) -> LoadRequest | None:
        """Re-issue the load after a failure or while a load is outstanding.

        Returns ``None`` when the controller is in any other state.
        """

        if not self._mounted or self._state not in (PlaybackState.ERROR, PlaybackState.LOADING):
            logger.debug("Ignoring retry in state %s", self._state.value)
            return None
        return self._begin_load(fallback_url or self._media_url)

    def unmount(self) -> None:
        """Discard the session; later events are ignored."""

        self._mounted = False
        self._state = PlaybackState.IDLE
        self._error_kind = None
        self._notify()
        self._listeners.clear()

    def handle(self, event: LifecycleEvent) -> bool:
        """Apply a lifecycle event, returning whether it changed the state."""

        if not isinstance(event, (MediaReady, MediaFailed)):
            raise TypeError(f"Unsupported lifecycle event {event!r}")
        if not self._mounted or event.generation != self._generation:
            logger.debug(
                "Discarding stale %s for generation %s (current %s)",
                type(event).__name__,
                event.generation,
                self._generation,
            )
            return False

        if isinstance(event, MediaReady):
            if self._state is not PlaybackState.LOADING:
                return False
            self._transition(PlaybackState.PLAYING)
            return True

        if self._state is PlaybackState.ERROR:
            return False
        logger.info(
            "Media load failed for %s (generation %s): %s",
            self._media_url,
            event.generation,
            event.kind.value,
        )
        self._error_kind = event.kind
        self._transition(PlaybackState.ERROR)
        return True

    # ------------------------------------------------------------------
    # User actions

    def play(self) -> bool:
        """Resume playback; valid while playing or paused."""

        if self._state is PlaybackState.PAUSED:
            self._transition(PlaybackState.PLAYING)
            return True
        return self._state is PlaybackState.PLAYING

    def pause(self) -> bool:
        """Pause playback; valid while playing or paused."""

        if self._state is PlaybackState.PLAYING:
            self._transition(PlaybackState.PAUSED)
            return True
        return self._state is PlaybackState.PAUSED

    def set_volume(self, volume: float) -> bool:
        """Set the volume, clamped to ``0.0``-``1.0``.

        Rejected in the error state and for non-finite values.
        """

        volume = float(volume)
        if self._state is PlaybackState.ERROR or not math.isfinite(volume):
            return False
        self._volume = min(max(volume, 0.0), 1.0)
        self._notify()
        return True

    def seek(self, position: float) -> bool:
        """Move the playback position in seconds.

        Rejected in the error state and for non-finite values.
        """

        position = float(position)
        if self._state is PlaybackState.ERROR or not math.isfinite(position):
            return False
        self._position = max(position, 0.0)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Internal helpers

    def _begin_load(self, media_url: str) -> LoadRequest:
        self._generation += 1
        self._media_url = media_url
        self._mounted = True
        self._error_kind = None
        self._position = 0.0
        request = LoadRequest(generation=self._generation, media_url=media_url)
        self._transition(PlaybackState.LOADING)

        if self._engine is not None:
            try:
                self._engine.load(request)
            except Exception as exc:
                logger.warning("Media engine rejected %s: %s", request, exc)
                self.handle(
                    MediaFailed(
                        generation=request.generation,
                        kind=MediaErrorKind.UNKNOWN,
                        detail=str(exc),
                    )
                )
        return request

    def _transition(self, state: PlaybackState) -> None:
        logger.debug(
            "Playback %s -> %s (generation %s)",
            self._state.value,
            state.value,
            self._generation,
        )
        self._state = state
        self._notify()

    def _notify(self) -> None:
        session = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                logger.exception("Playback listener %r failed", listener)
