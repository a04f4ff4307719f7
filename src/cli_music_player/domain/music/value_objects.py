"""Immutable value objects for the music bounded context."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Final

from pydantic import PlainSerializer, PlainValidator

from cli_music_player.domain.shared.messages import ErrorMessages

YOUTUBE_WATCH_URL: Final[str] = "https://www.youtube.com/watch?v="

_URL_SAFE_ID: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class TrackId:
    """Opaque catalog identifier, typically a YouTube video ID."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)
        if not _URL_SAFE_ID.fullmatch(self.value):
            raise ValueError(ErrorMessages.INVALID_TRACK_ID.format(value=self.value))

    def __str__(self) -> str:
        return self.value

    @property
    def watch_url(self) -> str:
        return f"{YOUTUBE_WATCH_URL}{self.value}"

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Check whether a raw catalog id can back a playable track."""
        return isinstance(value, str) and bool(_URL_SAFE_ID.fullmatch(value))


# Serializes as plain string, stores as TrackId in the model.
TrackIdField = Annotated[
    TrackId,
    PlainValidator(lambda v: TrackId(v) if isinstance(v, str) else v),
    PlainSerializer(lambda v: v.value, return_type=str),
]


class PlaybackState(Enum):
    """Observable state of the playback session.

    State transitions:
    - IDLE -> TRANSITIONING (play requested)
    - TRANSITIONING -> PLAYING (guard window elapsed, process still alive)
    - PLAYING -> TRANSITIONING (next/previous/auto-advance)
    - PLAYING -> IDLE (process exited or failed without advancing)
    - Any -> STOPPED (explicit stop)
    - Any -> IDLE (cleanup)
    """

    IDLE = "idle"
    TRANSITIONING = "transitioning"
    PLAYING = "playing"
    STOPPED = "stopped"

    @property
    def is_active(self) -> bool:
        return self in {PlaybackState.TRANSITIONING, PlaybackState.PLAYING}


class ControlStatus(Enum):
    """Outcome of a controller operation."""

    STARTED = "started"
    REJECTED_TRANSITIONING = "rejected_transitioning"
    EMPTY_PLAYLIST = "empty_playlist"
    SINGLE_TRACK = "single_track"
    END_OF_PLAYLIST = "end_of_playlist"
    INVALID_SELECTION = "invalid_selection"
    START_FAILED = "start_failed"
    STOPPED = "stopped"
    NOTHING_PLAYING = "nothing_playing"

    @property
    def started_playback(self) -> bool:
        return self == ControlStatus.STARTED
