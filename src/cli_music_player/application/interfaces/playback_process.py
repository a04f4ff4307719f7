"""Port interface for one external decoder/player invocation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProcessExited:
    """The player process exited on its own; negative codes mean killed by a signal."""

    return_code: int

    @property
    def succeeded(self) -> bool:
        return self.return_code == 0


@dataclass(frozen=True, slots=True)
class ProcessFailed:
    """The player process could not be spawned or crashed while running."""

    reason: str
    is_executable_missing: bool = False


TerminalEvent = ProcessExited | ProcessFailed

TerminalCallback = Callable[["PlaybackProcess", TerminalEvent], None]


class PlaybackProcess(ABC):
    """Handle around exactly one player invocation bound to one URL.

    The handle reports exactly one terminal event through the callback passed
    to :meth:`start`. The callback receives the handle itself so that
    consumers can tell a superseded handle from the current one.
    """

    @abstractmethod
    def start(
        self,
        url: str,
        on_terminal: TerminalCallback,
        *,
        user_agent: str | None = None,
    ) -> None:
        """Launch the player for ``url``.

        Spawn failures are delivered as a :class:`ProcessFailed` terminal event,
        never raised from here.
        """
        ...

    @abstractmethod
    def terminate_graceful(self) -> None:
        """Request termination; does not wait for the process to exit."""
        ...

    @abstractmethod
    def terminate_force(self) -> None:
        """Kill the process outright."""
        ...

    @abstractmethod
    def escalate_after(self, delay: float) -> None:
        """Force-kill after ``delay`` seconds unless the process exits first."""
        ...

    @property
    @abstractmethod
    def has_terminated(self) -> bool:
        """Whether the terminal event has already been delivered."""
        ...

    @property
    @abstractmethod
    def pid(self) -> int | None:
        ...


ProcessFactory = Callable[[], PlaybackProcess]
