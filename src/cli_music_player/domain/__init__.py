"""
Domain Layer

Contains pure playback logic organized by bounded contexts:
- shared/: Cross-cutting types, events, messages and exceptions
- music/: Track, playback session and playlist navigation
"""

from cli_music_player.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
