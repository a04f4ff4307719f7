"""Fakes, factories and timing constants shared by the test modules."""

from cli_music_player.application.interfaces.playback_process import (
    PlaybackProcess,
    ProcessExited,
    ProcessFailed,
)

# ============================================================================
# Timing
# ============================================================================

# Tiny delays keep timer-driven tests fast; SETTLE waits out all of them.
GUARD_SECONDS = 0.02
ADVANCE_SECONDS = 0.01
ERROR_ADVANCE_SECONDS = 0.015
KILL_GRACE_SECONDS = 0.5
SETTLE_SECONDS = 0.06


# ============================================================================
# Fake player process
# ============================================================================


class FakeProcess(PlaybackProcess):
    """Player handle whose terminal events are fired by the test."""

    _pid_counter = 4000

    def __init__(self, *, fail_on_start: bool = False) -> None:
        FakeProcess._pid_counter += 1
        self._pid = FakeProcess._pid_counter
        self._terminated = False
        self.fail_on_start = fail_on_start

        self.url: str | None = None
        self.user_agent: str | None = None
        self.on_terminal = None
        self.graceful_requests = 0
        self.force_requests = 0
        self.escalation_delays: list[float] = []

    @property
    def pid(self) -> int | None:
        return self._pid

    @property
    def has_terminated(self) -> bool:
        return self._terminated

    def start(self, url, on_terminal, *, user_agent=None) -> None:
        if self.fail_on_start:
            raise RuntimeError("spawn exploded")
        self.url = url
        self.user_agent = user_agent
        self.on_terminal = on_terminal

    def terminate_graceful(self) -> None:
        self.graceful_requests += 1

    def terminate_force(self) -> None:
        self.force_requests += 1

    def escalate_after(self, delay: float) -> None:
        self.escalation_delays.append(delay)

    def emit(self, event) -> None:
        self._terminated = True
        self.on_terminal(self, event)

    def exit(self, code: int = 0) -> None:
        self.emit(ProcessExited(return_code=code))

    def fail(self, reason: str = "decoder crashed", *, missing: bool = False) -> None:
        self.emit(ProcessFailed(reason=reason, is_executable_missing=missing))


class FakeProcessFactory:
    """Records every handle the controller asks for."""

    def __init__(self) -> None:
        self.created: list[FakeProcess] = []
        self.fail_next_start = False

    def __call__(self) -> FakeProcess:
        process = FakeProcess(fail_on_start=self.fail_next_start)
        self.fail_next_start = False
        self.created.append(process)
        return process

    @property
    def last(self) -> FakeProcess:
        return self.created[-1]

    @property
    def urls(self) -> list[str | None]:
        return [process.url for process in self.created]


class EventRecorder:
    """Collects every published domain event."""

    def __init__(self, event_bus) -> None:
        from cli_music_player.domain.shared import events

        self.events: list = []
        for event_type in (
            events.TrackStartedPlaying,
            events.TrackFinishedPlaying,
            events.TrackStoppedWithCode,
            events.PlayerExecutableMissing,
            events.PlayerProcessFailed,
            events.TransitionRejected,
            events.PlaybackStopped,
            events.ShutdownRequested,
        ):
            event_bus.subscribe(event_type, self.events.append)

    def of_type(self, event_type) -> list:
        return [event for event in self.events if isinstance(event, event_type)]


def make_track(track_id: str, title: str | None = None, **overrides):
    from cli_music_player.domain.music.entities import Track

    return Track(
        id=track_id,
        title=title or f"Song {track_id}",
        artist=overrides.pop("artist", "Test Artist"),
        duration_display=overrides.pop("duration_display", "3:05"),
        **overrides,
    )

