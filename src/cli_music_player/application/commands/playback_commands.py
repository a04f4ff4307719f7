"""
Playback Commands

Menu actions and the handler that dispatches them onto the session controller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ...domain.music.value_objects import ControlStatus
from ...domain.shared.messages import ConsoleMessages, LogTemplates

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...domain.music.entities import Track
    from ..interfaces.catalog_search import CatalogSearch
    from ..services.session_controller import SessionController

logger = logging.getLogger(__name__)


class MenuAction(Enum):
    """Choices offered by the main menu, in display order."""

    SEARCH = "Search and play"
    SHOW = "Show playlist"
    NOW = "Now playing"
    NEXT = "Next track"
    PREVIOUS = "Previous track"
    STOP = "Stop playback"
    EXIT = "Exit"


class SearchStatus(Enum):
    FOUND = "found"
    NO_RESULTS = "no_results"
    EMPTY_QUERY = "empty_query"


_STATUS_MESSAGES: dict[ControlStatus, str] = {
    ControlStatus.REJECTED_TRANSITIONING: ConsoleMessages.TRANSITION_IN_PROGRESS,
    ControlStatus.EMPTY_PLAYLIST: ConsoleMessages.PLAYLIST_EMPTY,
    ControlStatus.SINGLE_TRACK: ConsoleMessages.ONLY_ONE_TRACK,
    ControlStatus.END_OF_PLAYLIST: ConsoleMessages.END_OF_PLAYLIST,
    ControlStatus.INVALID_SELECTION: ConsoleMessages.INVALID_SELECTION,
    ControlStatus.START_FAILED: ConsoleMessages.START_FAILED,
    ControlStatus.STOPPED: ConsoleMessages.PLAYBACK_STOPPED,
    ControlStatus.NOTHING_PLAYING: ConsoleMessages.NOTHING_TO_STOP,
}


@dataclass
class CommandResult:
    """Result of a playback command.

    ``message`` is empty when the outcome is announced elsewhere, e.g. a
    started track is reported through the event bus.
    """

    status: ControlStatus
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.status in {ControlStatus.STARTED, ControlStatus.STOPPED}

    @classmethod
    def from_status(cls, status: ControlStatus) -> CommandResult:
        return cls(status=status, message=_STATUS_MESSAGES.get(status, ""))


@dataclass
class SearchOutcome:
    """Tracks found for a query; the playlist is untouched until one is selected."""

    query: str
    status: SearchStatus
    tracks: list[Track] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return self.status == SearchStatus.FOUND

    @property
    def message(self) -> str:
        if self.status == SearchStatus.FOUND:
            return ""
        return ConsoleMessages.NO_RESULTS


class PlaybackCommandHandler:
    """Maps menu actions onto session controller operations.

    Re-entrant: it never assumes the controller finished a previous
    operation, the controller enforces its own guards.
    """

    def __init__(
        self,
        *,
        session_controller: SessionController,
        catalog_search: CatalogSearch,
    ) -> None:
        self._controller = session_controller
        self._catalog_search = catalog_search

    async def search(self, query: str) -> SearchOutcome:
        """Look up tracks without touching the playlist."""
        query = query.strip()
        if not query:
            return SearchOutcome(query=query, status=SearchStatus.EMPTY_QUERY)

        tracks = await self._catalog_search.search(query)
        if not tracks:
            return SearchOutcome(query=query, status=SearchStatus.NO_RESULTS)
        return SearchOutcome(query=query, status=SearchStatus.FOUND, tracks=tracks)

    def play_selection(self, tracks: Sequence[Track], index: int | None) -> CommandResult | None:
        """Replace the playlist with ``tracks`` and play ``index``.

        ``None`` or a negative index means the user cancelled; nothing happens.
        """
        if index is None or index < 0:
            return None
        return CommandResult.from_status(self._controller.set_playlist(tracks, index))

    def next(self) -> CommandResult:
        return self.handle(MenuAction.NEXT)

    def previous(self) -> CommandResult:
        return self.handle(MenuAction.PREVIOUS)

    def stop(self) -> CommandResult:
        return self.handle(MenuAction.STOP)

    def handle(self, action: MenuAction) -> CommandResult:
        """Run the controller operation behind a navigation or stop action."""
        logger.debug(LogTemplates.COMMAND_DISPATCHED, action.name)

        match action:
            case MenuAction.NEXT:
                status = self._controller.next()
            case MenuAction.PREVIOUS:
                status = self._controller.previous()
            case MenuAction.STOP:
                status = self._controller.stop()
            case _:
                raise ValueError(f"Menu action {action.name} is not a playback command")

        return CommandResult.from_status(status)

    def exit(self) -> None:
        """Release the player before leaving the menu."""
        logger.debug(LogTemplates.COMMAND_DISPATCHED, MenuAction.EXIT.name)
        self._controller.cleanup()
