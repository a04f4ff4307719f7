"""Session Controller - owns the playlist and the single active player process."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from ...domain.music.entities import PlaybackSession, Track
from ...domain.music.value_objects import ControlStatus, PlaybackState
from ...domain.shared.events import (
    PlaybackStopped,
    PlayerExecutableMissing,
    PlayerProcessFailed,
    TrackFinishedPlaying,
    TrackStartedPlaying,
    TrackStoppedWithCode,
    TransitionRejected,
)
from ...domain.shared.messages import LogTemplates
from ..interfaces.playback_process import ProcessExited, ProcessFailed

if TYPE_CHECKING:
    from ...domain.shared.events import EventBus
    from ..interfaces.playback_process import PlaybackProcess, ProcessFactory, TerminalEvent

logger = logging.getLogger(__name__)


class SessionController:
    """Mediates every playback command against asynchronous process events.

    All methods are synchronous and must be called from the event loop thread;
    each one runs to completion before the next command or process event is
    handled, so the session needs no locking. Player processes are never
    awaited: they are asked to terminate and a force kill is scheduled.
    """

    def __init__(
        self,
        *,
        process_factory: ProcessFactory,
        event_bus: EventBus,
        transition_guard_seconds: float = 1.0,
        auto_advance_delay_seconds: float = 0.5,
        error_advance_delay_seconds: float = 1.0,
        kill_grace_seconds: float = 2.0,
        user_agent: str | None = None,
    ) -> None:
        self._process_factory = process_factory
        self._event_bus = event_bus
        self._transition_guard_seconds = transition_guard_seconds
        self._auto_advance_delay_seconds = auto_advance_delay_seconds
        self._error_advance_delay_seconds = error_advance_delay_seconds
        self._kill_grace_seconds = kill_grace_seconds
        self._user_agent = user_agent

        self._session = PlaybackSession()
        self._active_process: PlaybackProcess | None = None

        # Handles asked to terminate that have not reported back yet.
        self._retired: set[PlaybackProcess] = set()

        self._guard_timer: asyncio.TimerHandle | None = None
        self._advance_timer: asyncio.TimerHandle | None = None

    # ── Commands ────────────────────────────────────────────────────

    def set_playlist(self, tracks: Sequence[Track], start_index: int) -> ControlStatus:
        """Replace the playlist and start playing from ``start_index``."""
        if not self._session.replace_playlist(tracks, start_index):
            logger.warning(LogTemplates.PLAYLIST_REJECTED, len(tracks), start_index)
            return ControlStatus.INVALID_SELECTION

        logger.info(LogTemplates.PLAYLIST_REPLACED, len(tracks), start_index)
        return self.play_current()

    def play_current(self) -> ControlStatus:
        """Start the track at the current index, replacing any running process.

        Rejected while a previous switch is still inside its guard window.
        """
        track = self._session.current_track
        if track is None:
            logger.info(LogTemplates.PLAY_NO_CURRENT_TRACK)
            return ControlStatus.EMPTY_PLAYLIST

        if self._session.is_transitioning:
            return self._reject_transition(track.title)

        self._session.is_transitioning = True
        self._cancel_advance()
        self._retire_active()

        logger.info(
            LogTemplates.TRACK_STARTING, track.title, track.playable_url, self._session.current_index
        )
        process = self._process_factory()
        self._active_process = process
        self._session.mark_started()

        status = ControlStatus.STARTED
        try:
            process.start(track.playable_url, self._on_terminal, user_agent=self._user_agent)
        except Exception:
            logger.exception(LogTemplates.TRACK_START_FAILED, track.title)
            self._active_process = None
            self._session.is_playing = False
            status = ControlStatus.START_FAILED

        self._schedule_guard()

        if status.started_playback:
            self._event_bus.publish(
                TrackStartedPlaying(
                    track_id=str(track.id),
                    track_title=track.display_title,
                    track_url=track.playable_url,
                    duration_display=track.duration_display,
                    playlist_index=self._session.current_index,
                )
            )
        return status

    def next(self) -> ControlStatus:
        return self._navigate(self._session.next_index, "next")

    def previous(self) -> ControlStatus:
        return self._navigate(self._session.previous_index, "previous")

    def stop(self) -> ControlStatus:
        """Stop playback and disable auto-advance until the next explicit play."""
        if self._active_process is None and self._advance_timer is None:
            return ControlStatus.NOTHING_PLAYING

        track = self._session.current_track
        self._session.auto_advance = False
        self.cleanup()

        logger.info(LogTemplates.PLAYBACK_STOPPED)
        self._event_bus.publish(PlaybackStopped(track_title=track.display_title if track else ""))
        return ControlStatus.STOPPED

    def cleanup(self) -> None:
        """Tear down the active process and pending timers.

        Safe to call any number of times, with or without a running loop.
        """
        self._cancel_guard()
        self._cancel_advance()

        if self._active_process is not None:
            logger.info(LogTemplates.CLEANUP_TERMINATING, self._active_process.pid)
            self._retire_active()

        self._session.settle()
        logger.debug(LogTemplates.CLEANUP_DONE)

    def reap(self) -> int:
        """Force-kill retired processes that have not exited yet.

        Returns the number of processes that were killed.
        """
        survivors = [process for process in self._retired if not process.has_terminated]
        self._retired.clear()

        if survivors:
            logger.info(LogTemplates.RETIRED_REAPED, len(survivors))
        for process in survivors:
            try:
                process.terminate_force()
            except OSError:
                logger.exception(LogTemplates.PROCESS_TERMINATE_FAILED, process.pid)
        return len(survivors)

    # ── Queries ─────────────────────────────────────────────────────

    @property
    def current_track(self) -> Track | None:
        return self._session.current_track

    @property
    def current_index(self) -> int:
        return self._session.current_index

    @property
    def playlist(self) -> tuple[Track, ...]:
        return self._session.playlist

    @property
    def is_playing(self) -> bool:
        return self._session.is_playing

    @property
    def is_transitioning(self) -> bool:
        return self._session.is_transitioning

    @property
    def auto_advance(self) -> bool:
        return self._session.auto_advance

    @property
    def state(self) -> PlaybackState:
        return self._session.state

    @property
    def active_process(self) -> PlaybackProcess | None:
        return self._active_process

    @property
    def has_retired_processes(self) -> bool:
        return any(not process.has_terminated for process in self._retired)

    def snapshot(self) -> PlaybackSession:
        """Copy of the session for read-only consumers."""
        return self._session.model_copy()

    # ── Process events ──────────────────────────────────────────────

    def _on_terminal(self, process: PlaybackProcess, event: TerminalEvent) -> None:
        if process is not self._active_process:
            self._retired.discard(process)
            logger.debug(LogTemplates.STALE_EVENT_IGNORED, type(event).__name__, process.pid)
            return

        track = self._session.current_track
        title = track.display_title if track else ""
        self._active_process = None
        self._cancel_guard()
        self._session.settle()

        can_advance = self._session.auto_advance and self._session.playlist_length > 1

        if isinstance(event, ProcessExited):
            if event.succeeded:
                logger.info(LogTemplates.TRACK_FINISHED, title)
                self._event_bus.publish(
                    TrackFinishedPlaying(
                        track_id=str(track.id) if track else "",
                        track_title=title,
                        will_advance=can_advance,
                    )
                )
                if can_advance:
                    self._schedule_advance(self._auto_advance_delay_seconds)
            else:
                logger.warning(LogTemplates.TRACK_STOPPED_WITH_CODE, title, event.return_code)
                self._event_bus.publish(
                    TrackStoppedWithCode(
                        track_id=str(track.id) if track else "",
                        track_title=title,
                        exit_code=event.return_code,
                    )
                )
            return

        if isinstance(event, ProcessFailed):
            if event.is_executable_missing:
                logger.error(LogTemplates.PLAYER_EXECUTABLE_MISSING, title, event.reason)
                self._event_bus.publish(
                    PlayerExecutableMissing(track_title=title, reason=event.reason)
                )
                return

            logger.error(LogTemplates.TRACK_PROCESS_FAILED, title, event.reason)
            self._event_bus.publish(
                PlayerProcessFailed(track_title=title, reason=event.reason, will_advance=can_advance)
            )
            if can_advance:
                self._schedule_advance(self._error_advance_delay_seconds)

    # ── Internals ───────────────────────────────────────────────────

    def _navigate(self, compute_index: Callable[[], int], action: str) -> ControlStatus:
        length = self._session.playlist_length
        if length == 0:
            logger.info(LogTemplates.NAVIGATION_SKIPPED, ControlStatus.EMPTY_PLAYLIST.value)
            return ControlStatus.EMPTY_PLAYLIST
        if length == 1:
            logger.info(LogTemplates.NAVIGATION_SKIPPED, ControlStatus.SINGLE_TRACK.value)
            return ControlStatus.SINGLE_TRACK
        if self._session.is_transitioning:
            return self._reject_transition(action)

        target = compute_index()
        if target == self._session.current_index:
            logger.info(LogTemplates.NAVIGATION_SKIPPED, ControlStatus.END_OF_PLAYLIST.value)
            return ControlStatus.END_OF_PLAYLIST

        self._session.current_index = target
        return self.play_current()

    def _reject_transition(self, requested: str) -> ControlStatus:
        logger.warning(LogTemplates.TRANSITION_IN_PROGRESS, requested)
        self._event_bus.publish(TransitionRejected(requested_action=requested))
        return ControlStatus.REJECTED_TRANSITIONING

    def _retire_active(self) -> None:
        process = self._active_process
        self._active_process = None
        if process is None or process.has_terminated:
            return

        self._retired.add(process)
        try:
            process.terminate_graceful()
            process.escalate_after(self._kill_grace_seconds)
        except OSError:
            logger.exception(LogTemplates.PROCESS_TERMINATE_FAILED, process.pid)
            return
        logger.debug(LogTemplates.PROCESS_RETIRED, process.pid, self._kill_grace_seconds)

    def _schedule_guard(self) -> None:
        self._cancel_guard()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(LogTemplates.TRANSITION_GUARD_NO_LOOP)
            self._end_transition()
            return
        self._guard_timer = loop.call_later(self._transition_guard_seconds, self._end_transition)

    def _end_transition(self) -> None:
        self._guard_timer = None
        if self._session.is_transitioning:
            self._session.is_transitioning = False
            logger.debug(LogTemplates.TRANSITION_GUARD_ELAPSED)

    def _schedule_advance(self, delay: float) -> None:
        self._cancel_advance()
        loop = asyncio.get_running_loop()
        self._advance_timer = loop.call_later(delay, self._auto_advance)
        logger.debug(LogTemplates.AUTO_ADVANCE_SCHEDULED, delay)

    def _auto_advance(self) -> None:
        self._advance_timer = None
        if not self._session.auto_advance:
            return
        status = self.next()
        logger.info(LogTemplates.AUTO_ADVANCE_RESULT, status.value)

    def _cancel_guard(self) -> None:
        if self._guard_timer is not None:
            self._guard_timer.cancel()
            self._guard_timer = None

    def _cancel_advance(self) -> None:
        if self._advance_timer is not None:
            self._advance_timer.cancel()
            self._advance_timer = None
