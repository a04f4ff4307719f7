"""Query for retrieving the current playlist."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from cli_music_player.domain.music.entities import Track
from cli_music_player.domain.shared.types import NonNegativeInt

if TYPE_CHECKING:
    from ..services.session_controller import SessionController


class PlaylistView(BaseModel):
    model_config = ConfigDict(frozen=True)

    tracks: list[Track] = Field(default_factory=list)
    current_index: NonNegativeInt = 0
    is_playing: bool = False

    @property
    def length(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return len(self.tracks) == 0

    def is_current(self, index: int) -> bool:
        return index == self.current_index


class GetPlaylistHandler:

    def __init__(self, *, session_controller: SessionController) -> None:
        self._controller = session_controller

    def handle(self) -> PlaylistView:
        return PlaylistView(
            tracks=list(self._controller.playlist),
            current_index=self._controller.current_index,
            is_playing=self._controller.is_playing,
        )
