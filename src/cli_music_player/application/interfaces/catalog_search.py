"""Port interface for searching the remote track catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cli_music_player.domain.shared.types import SearchLimit

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class CatalogSearch(ABC):
    """Interface for turning a free-text query into playable tracks."""

    @abstractmethod
    async def search(self, query: str, limit: SearchLimit | None = None) -> list["Track"]:
        """Search for tracks matching a query.

        Implementations recover from backend failures locally and return an
        empty list; only entries with a usable id are returned.
        """
        ...
