"""
Unit Tests for ConsolePresenter

Tests for:
- Menu output (search results, playlist, now playing, command results)
- Event bus notices (started, finished, stopped, player missing/failed, shutdown)
- Escaping of catalog titles containing rich markup
"""

from io import StringIO

import pytest
from helpers import make_track
from rich.console import Console

from cli_music_player.application.commands.playback_commands import CommandResult
from cli_music_player.application.queries.get_current import CurrentTrackInfo
from cli_music_player.application.queries.get_playlist import PlaylistView
from cli_music_player.domain.music.value_objects import ControlStatus, PlaybackState
from cli_music_player.domain.shared.events import (
    EventBus,
    PlaybackStopped,
    PlayerExecutableMissing,
    PlayerProcessFailed,
    ShutdownRequested,
    TrackFinishedPlaying,
    TrackStartedPlaying,
    TrackStoppedWithCode,
)
from cli_music_player.infrastructure.terminal.presenter import ConsolePresenter


@pytest.fixture
def output():
    return StringIO()


@pytest.fixture
def presenter(output):
    return ConsolePresenter(Console(file=output, width=120, highlight=False, color_system=None))


class TestMenuOutput:
    """Tests for output rendered on request."""

    def test_search_results_numbered_with_cancel(self, presenter, output, three_tracks):
        """Should number results from 1 and offer 0 to cancel."""
        presenter.search_results(three_tracks)

        text = output.getvalue()
        assert " 1. A - Test Artist (3:05)" in text
        assert " 3. C - Test Artist (3:05)" in text
        assert " 0. Cancel" in text

    def test_playlist_marks_current(self, presenter, output, three_tracks):
        """Should mark only the current track."""
        presenter.playlist(PlaylistView(tracks=three_tracks, current_index=1))

        lines = [line for line in output.getvalue().splitlines() if "Test Artist" in line]
        assert lines[0].startswith("  A")
        assert lines[1].startswith("▶ B")
        assert lines[2].startswith("  C")

    def test_empty_playlist(self, presenter, output):
        """Should say the playlist is empty."""
        presenter.playlist(PlaylistView())

        assert "Playlist is empty" in output.getvalue()

    def test_now_playing(self, presenter, output, sample_track):
        """Should show title, artist, duration and position."""
        presenter.now_playing(
            CurrentTrackInfo(
                track=sample_track,
                index=0,
                is_playing=True,
                state=PlaybackState.PLAYING,
                playlist_length=2,
            )
        )

        text = output.getvalue()
        assert "Title: Never Gonna Give You Up" in text
        assert "Artist: Rick Astley" in text
        assert "Duration: 3:05" in text
        assert "Track 1/2" in text

    def test_nothing_playing(self, presenter, output):
        """Should say nothing is playing."""
        presenter.now_playing(CurrentTrackInfo())

        assert "No track is currently playing" in output.getvalue()

    def test_results(self, presenter, output):
        """Should print refusal messages, stay silent on start and report cancellations."""
        presenter.result(CommandResult.from_status(ControlStatus.STARTED))
        assert output.getvalue() == ""

        presenter.result(CommandResult.from_status(ControlStatus.SINGLE_TRACK))
        presenter.result(None)

        text = output.getvalue()
        assert "Only one track in playlist" in text
        assert "Selection cancelled" in text

    def test_markup_in_titles_is_escaped(self, presenter, output):
        """Should print titles with brackets literally."""
        presenter.search_results([make_track("abc", "Song [official video]")])

        assert "Song [official video]" in output.getvalue()

    def test_player_not_installed(self, presenter, output):
        """Should explain that mpv is required."""
        presenter.player_not_installed()

        text = output.getvalue()
        assert "MPV Media Player not found!" in text
        assert "https://mpv.io/installation/" in text


class TestBusNotices:
    """Tests for notices delivered through the event bus."""

    @pytest.fixture
    def bus(self, presenter):
        bus = EventBus()
        presenter.subscribe(bus)
        return bus

    def test_track_started(self, bus, output):
        """Should announce the track and its duration."""
        bus.publish(TrackStartedPlaying(track_title="A - Test Artist", duration_display="3:05"))

        text = output.getvalue()
        assert "Now Playing: A - Test Artist" in text
        assert "Duration: 3:05" in text

    def test_track_finished_and_stopped(self, bus, output):
        """Should report natural ends and non-zero exit codes."""
        bus.publish(TrackFinishedPlaying())
        bus.publish(TrackStoppedWithCode(exit_code=2))

        text = output.getvalue()
        assert "Track finished playing" in text
        assert "Track stopped with code: 2" in text

    def test_player_missing(self, bus, output):
        """Should print the error and reinstall guidance."""
        bus.publish(PlayerExecutableMissing(reason="[Errno 2] No such file or directory: 'mpv'"))

        text = output.getvalue()
        assert "MPV Error: [Errno 2]" in text
        assert "MPV not found!" in text
        assert "restart the application" in text

    def test_player_failed(self, bus, output):
        """Should print the error only."""
        bus.publish(PlayerProcessFailed(reason="decoder crashed"))

        text = output.getvalue()
        assert "MPV Error: decoder crashed" in text
        assert "MPV not found!" not in text

    def test_shutdown(self, bus, output):
        """Should distinguish signal shutdowns from fatal faults."""
        bus.publish(ShutdownRequested(reason="SIGTERM", exit_code=0))
        bus.publish(ShutdownRequested(reason="RuntimeError('x')", exit_code=1))

        text = output.getvalue()
        assert "Received SIGTERM, cleaning up..." in text
        assert "Fatal error: RuntimeError('x')" in text

    def test_stop_not_rendered_twice(self, bus, output):
        """Should leave the stop notice to the command result."""
        bus.publish(PlaybackStopped(track_title="A"))

        assert output.getvalue() == ""
