"""Domain event bus for publishing and subscribing to events."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from cli_music_player.domain.shared.datetime_utils import utcnow
from cli_music_player.domain.shared.messages import LogTemplates
from cli_music_player.domain.shared.types import (
    NonEmptyStr,
    NonNegativeInt,
    UtcDatetimeField,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], None]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


# === Playback Events ===


class TrackStartedPlaying(DomainEvent):
    track_id: str = ""
    track_title: str = ""
    track_url: str = ""
    duration_display: str = "0:00"
    playlist_index: NonNegativeInt = 0


class TrackFinishedPlaying(DomainEvent):
    track_id: str = ""
    track_title: str = ""
    will_advance: bool = False


class TrackStoppedWithCode(DomainEvent):
    track_id: str = ""
    track_title: str = ""
    exit_code: int | None = None


class PlayerExecutableMissing(DomainEvent):
    track_title: str = ""
    reason: str = ""


class PlayerProcessFailed(DomainEvent):
    track_title: str = ""
    reason: str = ""
    will_advance: bool = False


class TransitionRejected(DomainEvent):
    requested_action: str = ""


class PlaybackStopped(DomainEvent):
    track_title: str = ""


# === Lifecycle Events ===


class ShutdownRequested(DomainEvent):
    reason: str = ""
    exit_code: int = 0


# === Event Bus ===


class EventBus:
    """In-memory pub/sub event bus for domain events.

    Handlers run synchronously in subscription order on the caller's thread,
    which is always the event loop thread. Exceptions in handlers are logged
    but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(LogTemplates.EVENT_SUBSCRIBED, event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(LogTemplates.EVENT_UNSUBSCRIBED, event_type.__name__)

    def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(LogTemplates.EVENT_NO_HANDLERS, event_type.__name__)
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(LogTemplates.EVENT_HANDLER_FAILED, event_type.__name__)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug(LogTemplates.EVENT_BUS_CLEARED)
