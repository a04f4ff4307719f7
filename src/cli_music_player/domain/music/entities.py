"""Core domain entities for the music bounded context."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from cli_music_player.domain.music.value_objects import PlaybackState, TrackIdField
from cli_music_player.domain.shared.datetime_utils import ZERO_DURATION, format_duration
from cli_music_player.domain.shared.types import (
    DurationDisplayStr,
    HttpUrlStr,
    NonEmptyStr,
    PlaylistIndex,
    TrackTitleStr,
)

UNKNOWN_ARTIST = "Unknown Artist"


class Track(BaseModel):
    """Immutable value object representing a playable catalog item."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: TrackIdField
    title: TrackTitleStr
    artist: NonEmptyStr = UNKNOWN_ARTIST
    duration_display: DurationDisplayStr = ZERO_DURATION
    thumbnail_url: HttpUrlStr | None = None

    @property
    def playable_url(self) -> str:
        return self.id.watch_url

    @property
    def display_title(self) -> str:
        """Get ``title - artist`` for menus and notices."""
        return f"{self.title} - {self.artist}"

    @property
    def menu_label(self) -> str:
        return f"{self.display_title} ({self.duration_display})"

    @classmethod
    def from_search_result(
        cls,
        *,
        track_id: str,
        title: str,
        artist: str | None = None,
        duration_seconds: Any = None,
        thumbnail_url: str | None = None,
    ) -> Track:
        """Build a track from a raw catalog result, normalizing the duration to M:SS."""
        return cls(
            id=track_id,
            title=title,
            artist=artist or UNKNOWN_ARTIST,
            duration_display=format_duration(duration_seconds),
            thumbnail_url=thumbnail_url,
        )


class PlaybackSession(BaseModel):
    """Playlist position and playback flags for the single player session.

    The session is owned by the session controller; everything else only reads
    snapshots of it. The playlist is replaced wholesale, never edited in place.
    """

    model_config = ConfigDict(strict=True)

    playlist: tuple[Track, ...] = ()
    current_index: PlaylistIndex = 0
    is_playing: bool = False
    auto_advance: bool = True
    is_transitioning: bool = False

    @property
    def playlist_length(self) -> int:
        return len(self.playlist)

    @property
    def has_tracks(self) -> bool:
        return bool(self.playlist)

    @property
    def current_track(self) -> Track | None:
        """The track at ``current_index``; only meaningful for a non-empty playlist."""
        if 0 <= self.current_index < len(self.playlist):
            return self.playlist[self.current_index]
        return None

    @property
    def state(self) -> PlaybackState:
        if self.is_transitioning:
            return PlaybackState.TRANSITIONING
        if self.is_playing:
            return PlaybackState.PLAYING
        if not self.auto_advance:
            return PlaybackState.STOPPED
        return PlaybackState.IDLE

    def replace_playlist(self, tracks: Sequence[Track], start_index: int) -> bool:
        """Swap in a new playlist and position; returns False (no change) when invalid."""
        if not tracks or not 0 <= start_index < len(tracks):
            return False

        self.playlist = tuple(tracks)
        self.current_index = start_index
        return True

    def next_index(self) -> int:
        """Index after the current one, wrapping to 0 past the end."""
        return (self.current_index + 1) % len(self.playlist)

    def previous_index(self) -> int:
        """Index before the current one, wrapping to the last track below 0."""
        return (self.current_index - 1) % len(self.playlist)

    def mark_started(self) -> None:
        self.is_playing = True
        self.auto_advance = True

    def settle(self) -> None:
        """Drop back to a resting state after the process ended or was torn down."""
        self.is_playing = False
        self.is_transitioning = False
