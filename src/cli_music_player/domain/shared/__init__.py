"""
Shared Domain Kernel

Contains types, events and exceptions shared across all bounded contexts.
"""

from cli_music_player.domain.shared.exceptions import (
    CatalogSearchError,
    DomainError,
    InvalidOperationError,
)

__all__ = [
    "DomainError",
    "CatalogSearchError",
    "InvalidOperationError",
]
