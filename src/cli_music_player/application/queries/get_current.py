"""Query for retrieving the currently playing track."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from cli_music_player.domain.music.entities import Track
from cli_music_player.domain.music.value_objects import PlaybackState
from cli_music_player.domain.shared.types import NonNegativeInt

if TYPE_CHECKING:
    from ..services.session_controller import SessionController


class CurrentTrackInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    track: Track | None = None
    index: NonNegativeInt = 0
    is_playing: bool = False
    state: PlaybackState = PlaybackState.IDLE
    playlist_length: NonNegativeInt = 0

    @property
    def position_label(self) -> str:
        """One-based ``n/total`` position for display."""
        return f"{self.index + 1}/{self.playlist_length}"


class GetCurrentTrackHandler:

    def __init__(self, *, session_controller: SessionController) -> None:
        self._controller = session_controller

    def handle(self) -> CurrentTrackInfo:
        session = self._controller.snapshot()

        # A track only counts as current while its process is believed alive.
        if not session.is_playing:
            return CurrentTrackInfo(
                index=session.current_index,
                state=session.state,
                playlist_length=session.playlist_length,
            )

        return CurrentTrackInfo(
            track=session.current_track,
            index=session.current_index,
            is_playing=True,
            state=session.state,
            playlist_length=session.playlist_length,
        )
