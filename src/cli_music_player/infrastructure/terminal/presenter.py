"""Console rendering for command results, queries and playback notices."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from cli_music_player.domain.shared.events import (
    PlayerExecutableMissing,
    PlayerProcessFailed,
    ShutdownRequested,
    TrackFinishedPlaying,
    TrackStartedPlaying,
    TrackStoppedWithCode,
)
from cli_music_player.domain.shared.messages import ConsoleMessages

if TYPE_CHECKING:
    from cli_music_player.application.commands.playback_commands import CommandResult
    from cli_music_player.application.queries.get_current import CurrentTrackInfo
    from cli_music_player.application.queries.get_playlist import PlaylistView
    from cli_music_player.domain.music.entities import Track
    from cli_music_player.domain.shared.events import EventBus

CURRENT_MARKER = "[bold green]▶ [/]"
OTHER_MARKER = "  "


class ConsolePresenter:
    """Renders everything the player shows on the terminal.

    Asynchronous notices (track started, finished, failed) arrive through the
    event bus; menu output is rendered on request.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    @property
    def console(self) -> Console:
        return self._console

    def subscribe(self, event_bus: EventBus) -> None:
        event_bus.subscribe(TrackStartedPlaying, self.on_track_started)
        event_bus.subscribe(TrackFinishedPlaying, self.on_track_finished)
        event_bus.subscribe(TrackStoppedWithCode, self.on_track_stopped)
        event_bus.subscribe(PlayerExecutableMissing, self.on_player_missing)
        event_bus.subscribe(PlayerProcessFailed, self.on_player_failed)
        event_bus.subscribe(ShutdownRequested, self.on_shutdown)

    # ── Menu output ─────────────────────────────────────────────────

    def message(self, text: str) -> None:
        self._console.print(text)

    def banner(self) -> None:
        self._console.print()
        self._console.print(ConsoleMessages.BANNER)
        self._console.print()

    def goodbye(self) -> None:
        self._console.print(ConsoleMessages.GOODBYE)

    def cleanup_complete(self) -> None:
        self._console.print(ConsoleMessages.CLEANUP_COMPLETE)

    def result(self, result: CommandResult | None) -> None:
        if result is None:
            self._console.print(ConsoleMessages.SELECTION_CANCELLED)
        elif result.message:
            self._console.print(result.message)

    def search_results(self, tracks: list[Track]) -> None:
        for number, track in enumerate(tracks, start=1):
            self._console.print(f"[cyan]{number:>2}.[/] {self._escape(track.menu_label)}")
        self._console.print(f"[cyan]{0:>2}.[/] {ConsoleMessages.CANCEL_OPTION}")

    def playlist(self, view: PlaylistView) -> None:
        if view.is_empty:
            self._console.print()
            self._console.print(ConsoleMessages.PLAYLIST_EMPTY)
            return

        self._console.print()
        self._console.print(ConsoleMessages.PLAYLIST_HEADER)
        for index, track in enumerate(view.tracks):
            prefix = CURRENT_MARKER if view.is_current(index) else OTHER_MARKER
            self._console.print(
                f"{prefix}{self._escape(track.display_title)} "
                f"[gray50]({track.duration_display})[/]"
            )

    def now_playing(self, info: CurrentTrackInfo) -> None:
        track = info.track
        if track is None:
            self._console.print()
            self._console.print(ConsoleMessages.NOTHING_PLAYING)
            return

        self._console.print()
        self._console.print(ConsoleMessages.NOW_PLAYING_DETAILS_HEADER)
        self._console.print(f"Title: {self._escape(track.title)}")
        self._console.print(f"Artist: {self._escape(track.artist)}")
        self._console.print(f"Duration: {track.duration_display}")
        self._console.print(f"[gray50]Track {info.position_label}[/]")

    # ── Bus events ──────────────────────────────────────────────────

    def on_track_started(self, event: TrackStartedPlaying) -> None:
        self._console.print()
        self._console.print(
            f"{ConsoleMessages.NOW_PLAYING_HEADER} {self._escape(event.track_title)}"
        )
        self._console.print(f"[gray50]Duration: {event.duration_display}[/]")

    def on_track_finished(self, event: TrackFinishedPlaying) -> None:
        self._console.print()
        self._console.print(ConsoleMessages.TRACK_FINISHED)

    def on_track_stopped(self, event: TrackStoppedWithCode) -> None:
        self._console.print()
        self._console.print(ConsoleMessages.TRACK_STOPPED_WITH_CODE.format(code=event.exit_code))

    def on_player_missing(self, event: PlayerExecutableMissing) -> None:
        self._console.print(ConsoleMessages.PLAYER_ERROR.format(reason=self._escape(event.reason)))
        self._console.print(ConsoleMessages.PLAYER_MISSING)
        self._console.print(ConsoleMessages.PLAYER_MISSING_HINT)

    def on_player_failed(self, event: PlayerProcessFailed) -> None:
        self._console.print(ConsoleMessages.PLAYER_ERROR.format(reason=self._escape(event.reason)))

    def on_shutdown(self, event: ShutdownRequested) -> None:
        self._console.print()
        if event.exit_code == 0:
            self._console.print(ConsoleMessages.SHUTTING_DOWN.format(reason=event.reason))
        else:
            self._console.print(
                ConsoleMessages.FATAL_SHUTDOWN.format(reason=self._escape(event.reason))
            )

    def player_not_installed(self) -> None:
        self._console.print(ConsoleMessages.PLAYER_NOT_INSTALLED)
        self._console.print(ConsoleMessages.PLAYER_REQUIRED)
        self._console.print(ConsoleMessages.PLAYER_INSTALL_HINT)

    @staticmethod
    def _escape(text: str) -> str:
        # Titles come from the catalog and may contain [brackets].
        return escape(text)
