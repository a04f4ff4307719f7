"""
Application Queries

Read-only views of the playback session. Queries never modify state.
"""

from cli_music_player.application.queries.get_current import (
    CurrentTrackInfo,
    GetCurrentTrackHandler,
)
from cli_music_player.application.queries.get_playlist import GetPlaylistHandler, PlaylistView

__all__ = [
    "CurrentTrackInfo",
    "GetCurrentTrackHandler",
    "PlaylistView",
    "GetPlaylistHandler",
]
