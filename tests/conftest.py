import pytest

from helpers import (
    ADVANCE_SECONDS,
    ERROR_ADVANCE_SECONDS,
    GUARD_SECONDS,
    KILL_GRACE_SECONDS,
    EventRecorder,
    FakeProcessFactory,
    make_track,
)


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    return make_track("dQw4w9WgXcQ", "Never Gonna Give You Up", artist="Rick Astley")


@pytest.fixture
def three_tracks():
    """Playlist [A, B, C]."""
    return [make_track("trackA", "A"), make_track("trackB", "B"), make_track("trackC", "C")]


# ============================================================================
# Controller Fixtures
# ============================================================================


@pytest.fixture
def event_bus():
    from cli_music_player.domain.shared.events import EventBus

    return EventBus()


@pytest.fixture
def recorder(event_bus):
    return EventRecorder(event_bus)


@pytest.fixture
def process_factory():
    return FakeProcessFactory()


@pytest.fixture
def controller(process_factory, event_bus):
    """Session controller with fake processes and tiny timers."""
    from cli_music_player.application.services.session_controller import SessionController

    return SessionController(
        process_factory=process_factory,
        event_bus=event_bus,
        transition_guard_seconds=GUARD_SECONDS,
        auto_advance_delay_seconds=ADVANCE_SECONDS,
        error_advance_delay_seconds=ERROR_ADVANCE_SECONDS,
        kill_grace_seconds=KILL_GRACE_SECONDS,
        user_agent="TestAgent/1.0",
    )
