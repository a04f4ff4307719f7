"""
Music Bounded Context

Domain logic for tracks, the playlist and the playback session.
"""

from cli_music_player.domain.music.entities import PlaybackSession, Track
from cli_music_player.domain.music.value_objects import ControlStatus, PlaybackState, TrackId

__all__ = [
    # Entities
    "Track",
    "PlaybackSession",
    # Value Objects
    "TrackId",
    "PlaybackState",
    "ControlStatus",
]
