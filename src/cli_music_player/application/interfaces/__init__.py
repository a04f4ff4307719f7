"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from cli_music_player.application.interfaces.catalog_search import CatalogSearch
from cli_music_player.application.interfaces.playback_process import (
    PlaybackProcess,
    ProcessExited,
    ProcessFactory,
    ProcessFailed,
    TerminalEvent,
)

__all__ = [
    "CatalogSearch",
    "PlaybackProcess",
    "ProcessExited",
    "ProcessFailed",
    "ProcessFactory",
    "TerminalEvent",
]
