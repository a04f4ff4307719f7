"""
Application Commands

Menu actions and their handler. Every action maps to exactly one
session controller operation and carries no playback state itself.
"""

from cli_music_player.application.commands.playback_commands import (
    CommandResult,
    MenuAction,
    PlaybackCommandHandler,
    SearchOutcome,
    SearchStatus,
)

__all__ = [
    "MenuAction",
    "CommandResult",
    "SearchOutcome",
    "SearchStatus",
    "PlaybackCommandHandler",
]
