"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
for the session controller, its adapters, the command surface and the
terminal front end. Components are created on-demand and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.commands.playback_commands import PlaybackCommandHandler
    from ..application.interfaces.catalog_search import CatalogSearch
    from ..application.interfaces.playback_process import PlaybackProcess, ProcessFactory
    from ..application.queries.get_current import GetCurrentTrackHandler
    from ..application.queries.get_playlist import GetPlaylistHandler
    from ..application.services.session_controller import SessionController
    from ..domain.shared.events import EventBus
    from ..infrastructure.terminal.menu import TerminalMenu
    from ..infrastructure.terminal.presenter import ConsolePresenter
    from ..infrastructure.terminal.shutdown import ShutdownCoordinator
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. Tests replace
    collaborators by assigning the private slots before first access.
    """

    settings: Settings

    # Cross-cutting
    _event_bus: EventBus | None = None

    # Infrastructure adapters
    _catalog_search: CatalogSearch | None = None
    _process_factory: ProcessFactory | None = None

    # Application services
    _session_controller: SessionController | None = None

    # Command and query handlers
    _command_handler: PlaybackCommandHandler | None = None
    _current_track_handler: GetCurrentTrackHandler | None = None
    _playlist_handler: GetPlaylistHandler | None = None

    # Terminal front end
    _presenter: ConsolePresenter | None = None
    _menu: TerminalMenu | None = None
    _shutdown_coordinator: ShutdownCoordinator | None = None

    # === Cross-cutting ===

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import EventBus

            self._event_bus = EventBus()
        return self._event_bus

    # === Infrastructure ===

    @property
    def catalog_search(self) -> CatalogSearch:
        if self._catalog_search is None:
            from ..infrastructure.audio.ytdlp_search import YtDlpCatalogSearch

            self._catalog_search = YtDlpCatalogSearch(self.settings.search)
        return self._catalog_search

    @property
    def process_factory(self) -> ProcessFactory:
        """Get a factory creating one mpv handle per playback."""
        if self._process_factory is None:
            from ..infrastructure.audio.mpv_process import MpvConfig, MpvProcess

            config = MpvConfig.from_settings(self.settings.player)

            def create_process() -> PlaybackProcess:
                return MpvProcess(config)

            self._process_factory = create_process
        return self._process_factory

    # === Application Services ===

    @property
    def session_controller(self) -> SessionController:
        if self._session_controller is None:
            from ..application.services.session_controller import SessionController

            player = self.settings.player
            self._session_controller = SessionController(
                process_factory=self.process_factory,
                event_bus=self.event_bus,
                transition_guard_seconds=player.transition_guard_seconds,
                auto_advance_delay_seconds=player.auto_advance_delay_seconds,
                error_advance_delay_seconds=player.error_advance_delay_seconds,
                kill_grace_seconds=player.kill_grace_seconds,
                user_agent=player.user_agent,
            )
        return self._session_controller

    # === Command / Query Handlers ===

    @property
    def command_handler(self) -> PlaybackCommandHandler:
        if self._command_handler is None:
            from ..application.commands.playback_commands import PlaybackCommandHandler

            self._command_handler = PlaybackCommandHandler(
                session_controller=self.session_controller,
                catalog_search=self.catalog_search,
            )
        return self._command_handler

    @property
    def current_track_handler(self) -> GetCurrentTrackHandler:
        if self._current_track_handler is None:
            from ..application.queries.get_current import GetCurrentTrackHandler

            self._current_track_handler = GetCurrentTrackHandler(
                session_controller=self.session_controller
            )
        return self._current_track_handler

    @property
    def playlist_handler(self) -> GetPlaylistHandler:
        if self._playlist_handler is None:
            from ..application.queries.get_playlist import GetPlaylistHandler

            self._playlist_handler = GetPlaylistHandler(session_controller=self.session_controller)
        return self._playlist_handler

    # === Terminal ===

    @property
    def presenter(self) -> ConsolePresenter:
        """Get the console presenter, subscribed to playback notices."""
        if self._presenter is None:
            from ..infrastructure.terminal.presenter import ConsolePresenter

            self._presenter = ConsolePresenter()
            self._presenter.subscribe(self.event_bus)
        return self._presenter

    @property
    def menu(self) -> TerminalMenu:
        if self._menu is None:
            from ..infrastructure.terminal.menu import TerminalMenu

            self._menu = TerminalMenu(
                presenter=self.presenter,
                command_handler=self.command_handler,
                current_track_handler=self.current_track_handler,
                playlist_handler=self.playlist_handler,
            )
        return self._menu

    @property
    def shutdown_coordinator(self) -> ShutdownCoordinator:
        if self._shutdown_coordinator is None:
            from ..infrastructure.terminal.shutdown import ShutdownCoordinator

            self._shutdown_coordinator = ShutdownCoordinator(
                session_controller=self.session_controller,
                event_bus=self.event_bus,
                exit_delay_seconds=self.settings.lifecycle.exit_delay_seconds,
            )
        return self._shutdown_coordinator

    # === Lifecycle ===

    def shutdown(self) -> None:
        """Release the player process; safe to call more than once."""
        if self._session_controller is not None:
            self._session_controller.cleanup()
        if self._event_bus is not None:
            self._event_bus.clear()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
