"""
Tests for main.py - Main Entry Point

Tests for the main entry point including:
- Logging configuration
- Player executable check
- Menu / shutdown race in run_app
- Exit codes and error handling
"""

import asyncio
import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cli_music_player.main import _LOGGING_CONFIG_PATH, cli, main, run_app, setup_logging


@pytest.fixture(autouse=True)
def restore_log_levels():
    root = logging.getLogger()
    package = logging.getLogger("cli_music_player")
    levels = (root.level, package.level)
    yield
    root.setLevel(levels[0])
    package.setLevel(levels[1])


async def never() -> None:
    await asyncio.Event().wait()


class TestLoggingSetup:
    """Tests for logging configuration."""

    def test_shipped_config_is_valid(self):
        """Should ship a config that keeps the menu clear of routine logs."""
        config = json.loads(_LOGGING_CONFIG_PATH.read_text())

        assert config["handlers"]["console"]["stream"] == "ext://sys.stderr"
        assert config["handlers"]["console"]["level"] == "WARNING"
        assert "cli_music_player" in config["loggers"]
        assert "yt_dlp" in config["loggers"]

    def test_dictconfig_called_when_json_exists(self):
        """Should apply logging_config.json through dictConfig."""
        with patch("logging.config.dictConfig") as mock_dc:
            setup_logging("DEBUG")

        config = mock_dc.call_args.args[0]
        assert config["version"] == 1
        assert logging.getLogger("cli_music_player").level == logging.DEBUG

    def test_fallback_to_basicconfig_when_json_missing(self):
        """Should fall back to basicConfig when the file is missing."""
        with (
            patch("cli_music_player.main._LOGGING_CONFIG_PATH", Path("/nonexistent/logging.json")),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging("warning")

        assert mock_bc.call_args.kwargs["level"] == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_defaults_to_info(self):
        """Should use INFO for an unknown level name."""
        with patch("logging.config.dictConfig"):
            setup_logging("chatty")

        assert logging.getLogger().level == logging.INFO


class TestMain:
    """Tests for main()."""

    @pytest.fixture
    def container(self):
        container = MagicMock()
        return container

    @pytest.fixture
    def patched(self, container):
        with (
            patch("cli_music_player.main.setup_logging"),
            patch("cli_music_player.config.container.create_container", return_value=container),
            patch(
                "cli_music_player.infrastructure.audio.mpv_process.find_player_executable",
                return_value="/usr/bin/mpv",
            ) as find,
            patch("cli_music_player.main.run_app", AsyncMock(return_value=0)) as run,
        ):
            yield find, run

    def test_missing_player_exits_one(self, patched, container):
        """Should explain how to install mpv and exit with code 1."""
        find, run = patched
        find.return_value = None

        assert main() == 1
        container.presenter.player_not_installed.assert_called_once_with()
        run.assert_not_called()

    def test_normal_run(self, patched, container):
        """Should return the exit code from run_app."""
        _, run = patched
        run.return_value = 0

        assert main() == 0
        run.assert_awaited_once_with(container)

    def test_keyboard_interrupt(self, patched, container):
        """Should clean up and exit 0 on Ctrl+C outside the loop handlers."""
        _, run = patched
        run.side_effect = KeyboardInterrupt

        assert main() == 0
        container.shutdown.assert_called_once_with()

    def test_fatal_error(self, patched, container):
        """Should clean up and exit 1 on an unexpected error."""
        _, run = patched
        run.side_effect = RuntimeError("boom")

        assert main() == 1
        container.shutdown.assert_called_once_with()

    def test_cli_exits_with_main_result(self):
        """Should pass main's return value to sys.exit."""
        with patch("cli_music_player.main.main", return_value=3), pytest.raises(SystemExit) as exc:
            cli()

        assert exc.value.code == 3


class TestRunApp:
    """Tests for run_app."""

    @pytest.fixture
    def container(self):
        container = MagicMock()
        container.menu.run = AsyncMock(return_value=None)
        container.shutdown_coordinator.wait = never
        container.shutdown_coordinator.settle = AsyncMock()
        return container

    @pytest.mark.asyncio
    async def test_menu_exit(self, container):
        """Should settle the player, say goodbye and return 0."""
        assert await run_app(container) == 0

        shutdown = container.shutdown_coordinator
        shutdown.install.assert_called_once_with()
        shutdown.settle.assert_awaited_once_with()
        container.presenter.banner.assert_called_once_with()
        container.presenter.goodbye.assert_called_once_with()
        container.session_controller.cleanup.assert_called_once_with()
        container.session_controller.reap.assert_called_once_with()
        shutdown.uninstall.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_signal_shutdown(self, container):
        """Should abandon the menu and report cleanup on a signal."""
        container.menu.run = never
        container.shutdown_coordinator.wait = AsyncMock(return_value=0)

        assert await run_app(container) == 0

        container.presenter.cleanup_complete.assert_called_once_with()
        container.presenter.goodbye.assert_not_called()

    @pytest.mark.asyncio
    async def test_fatal_shutdown(self, container):
        """Should return 1 without the cleanup banner on a fault."""
        container.menu.run = never
        container.shutdown_coordinator.wait = AsyncMock(return_value=1)

        assert await run_app(container) == 1

        container.presenter.cleanup_complete.assert_not_called()
        container.session_controller.cleanup.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_menu_error_still_uninstalls(self, container):
        """Should restore handlers even when the menu crashes."""
        container.menu.run = AsyncMock(side_effect=RuntimeError("menu bug"))

        with pytest.raises(RuntimeError, match="menu bug"):
            await run_app(container)

        container.shutdown_coordinator.uninstall.assert_called_once_with()
        container.session_controller.cleanup.assert_called_once_with()
