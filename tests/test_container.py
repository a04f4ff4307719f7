"""
Unit Tests for Dependency Injection Container

Tests for:
- Container initialization with settings
- Lazy initialization (properties create instances on first access)
- Caching (subsequent property access returns same instance)
- Wiring of settings into the controller, player and search adapters
- Presenter subscription and shutdown
"""

import pytest

from cli_music_player.application.commands.playback_commands import PlaybackCommandHandler
from cli_music_player.application.queries import GetCurrentTrackHandler, GetPlaylistHandler
from cli_music_player.application.services.session_controller import SessionController
from cli_music_player.config.container import Container, create_container
from cli_music_player.config.settings import PlayerSettings, SearchSettings, Settings
from cli_music_player.domain.shared.events import (
    EventBus,
    ShutdownRequested,
    TrackStartedPlaying,
)
from cli_music_player.infrastructure.audio.mpv_process import MpvProcess
from cli_music_player.infrastructure.audio.ytdlp_search import YtDlpCatalogSearch
from cli_music_player.infrastructure.terminal.menu import TerminalMenu
from cli_music_player.infrastructure.terminal.presenter import ConsolePresenter
from cli_music_player.infrastructure.terminal.shutdown import ShutdownCoordinator


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        player=PlayerSettings(
            executable="/opt/mpv",
            user_agent="Agent/3.0",
            transition_guard_seconds=0.7,
            kill_grace_seconds=4.0,
        ),
        search=SearchSettings(result_limit=7),
    )


@pytest.fixture
def container(settings):
    return create_container(settings)


class TestContainerInit:
    """Tests for container creation."""

    def test_create_container(self, container, settings):
        """Should hold the settings and nothing else yet."""
        assert isinstance(container, Container)
        assert container.settings is settings
        assert container._session_controller is None
        assert container._presenter is None

    @pytest.mark.parametrize(
        ("attribute", "expected_type"),
        [
            ("event_bus", EventBus),
            ("catalog_search", YtDlpCatalogSearch),
            ("session_controller", SessionController),
            ("command_handler", PlaybackCommandHandler),
            ("current_track_handler", GetCurrentTrackHandler),
            ("playlist_handler", GetPlaylistHandler),
            ("presenter", ConsolePresenter),
            ("menu", TerminalMenu),
            ("shutdown_coordinator", ShutdownCoordinator),
        ],
    )
    def test_lazy_and_cached(self, container, attribute, expected_type):
        """Should build each component once on first access."""
        first = getattr(container, attribute)

        assert isinstance(first, expected_type)
        assert getattr(container, attribute) is first


class TestWiring:
    """Tests for settings flowing into components."""

    def test_controller_timings(self, container):
        """Should configure the controller from player settings."""
        controller = container.session_controller

        assert controller._transition_guard_seconds == 0.7
        assert controller._kill_grace_seconds == 4.0
        assert controller._user_agent == "Agent/3.0"

    def test_process_factory_builds_fresh_mpv_handles(self, container):
        """Should create a new configured mpv handle per call."""
        first = container.process_factory()
        second = container.process_factory()

        assert isinstance(first, MpvProcess)
        assert first is not second
        assert first._config.executable == "/opt/mpv"

    def test_catalog_search_limit(self, container):
        """Should pass search settings to the catalog."""
        assert container.catalog_search._settings.result_limit == 7

    def test_shared_event_bus(self, container):
        """Should wire the presenter and the controller to the same bus."""
        container.presenter

        assert container.session_controller._event_bus is container.event_bus
        assert container.event_bus.handler_count(TrackStartedPlaying) == 1
        assert container.event_bus.handler_count(ShutdownRequested) == 1


class TestShutdown:
    """Tests for Container.shutdown."""

    def test_shutdown_before_use(self, container):
        """Should be a no-op before anything was built."""
        container.shutdown()

    def test_shutdown_clears_bus(self, container):
        """Should clean up the controller and drop subscriptions; safe twice."""
        container.presenter
        container.session_controller

        container.shutdown()
        container.shutdown()

        assert container.event_bus.handler_count(TrackStartedPlaying) == 0
        assert container.session_controller.active_process is None
