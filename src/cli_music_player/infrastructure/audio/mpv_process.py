"""
mpv Player Process

Infrastructure component wrapping one mpv invocation for audio-only playback.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import signal
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cli_music_player.application.interfaces.playback_process import (
    PlaybackProcess,
    ProcessExited,
    ProcessFailed,
)
from cli_music_player.config.settings import DEFAULT_USER_AGENT, PlayerSettings
from cli_music_player.domain.shared.exceptions import InvalidOperationError
from cli_music_player.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from cli_music_player.application.interfaces.playback_process import (
        TerminalCallback,
        TerminalEvent,
    )

logger = logging.getLogger(__name__)

# mpv is started in its own session so its helpers (ytdl hook) die with it.
_HAS_PROCESS_GROUPS = hasattr(os, "killpg")


def find_player_executable(name: str = "mpv") -> str | None:
    """Resolve the player executable on PATH, returning its full path."""
    return shutil.which(name)


@dataclass
class MpvConfig:
    """Configuration for the mpv command line."""

    executable: str = "mpv"
    user_agent: str = DEFAULT_USER_AGENT
    extra_args: tuple[str, ...] = field(default_factory=tuple)

    # Audio only, no terminal UI
    disable_video: bool = True
    quiet: bool = True

    @classmethod
    def from_settings(cls, settings: PlayerSettings) -> MpvConfig:
        return cls(
            executable=settings.executable,
            user_agent=settings.user_agent,
            extra_args=settings.extra_args,
        )

    def build_args(self, url: str, *, user_agent: str | None = None) -> list[str]:
        """Get the full argument vector with ``url`` as the only positional argument."""
        args = [self.executable]
        if self.disable_video:
            args.append("--no-video")
        if self.quiet:
            args.extend(["--quiet", "--no-terminal", "--audio-display=no"])
        args.append(f"--user-agent={user_agent or self.user_agent}")
        args.extend(self.extra_args)
        args.append(url)
        return args


class MpvProcess(PlaybackProcess):
    """One mpv invocation, reporting exactly one terminal event.

    The process is spawned from a background task, so :meth:`start` returns
    immediately. Termination requested before the spawn completes is applied
    as soon as the process exists.
    """

    def __init__(self, config: MpvConfig | None = None) -> None:
        self._config = config or MpvConfig()

        self._process: asyncio.subprocess.Process | None = None
        self._task: asyncio.Task[None] | None = None
        self._on_terminal: TerminalCallback | None = None

        self._started = False
        self._terminated = False

        # Signal requested before the process existed: None, "terminate" or "kill"
        self._pending_request: str | None = None
        self._kill_timer: asyncio.TimerHandle | None = None

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def has_terminated(self) -> bool:
        return self._terminated

    def start(
        self,
        url: str,
        on_terminal: TerminalCallback,
        *,
        user_agent: str | None = None,
    ) -> None:
        if self._started:
            raise InvalidOperationError(
                "start", "started", ErrorMessages.PROCESS_ALREADY_STARTED
            )
        self._started = True
        self._on_terminal = on_terminal

        args = self._config.build_args(url, user_agent=user_agent)
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(args))
        self._task.add_done_callback(self._on_task_done)

    def terminate_graceful(self) -> None:
        self._request("terminate")

    def terminate_force(self) -> None:
        self._request("kill")

    def escalate_after(self, delay: float) -> None:
        if self._terminated:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Interpreter shutdown: nothing will run the timer.
            self.terminate_force()
            return

        if self._kill_timer is not None:
            self._kill_timer.cancel()
        self._kill_timer = loop.call_later(delay, self._force_kill_if_alive)

    async def _run(self, args: list[str]) -> None:
        executable = args[0]
        try:
            self._process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                start_new_session=_HAS_PROCESS_GROUPS,
            )
        except FileNotFoundError as e:
            logger.error(LogTemplates.PROCESS_SPAWN_FAILED, executable, e)
            self._finish(ProcessFailed(reason=str(e), is_executable_missing=True))
            return
        except OSError as e:
            logger.error(LogTemplates.PROCESS_SPAWN_FAILED, executable, e)
            self._finish(ProcessFailed(reason=str(e)))
            return

        logger.debug(LogTemplates.PROCESS_SPAWNED, executable, self._process.pid)

        if self._pending_request is not None:
            self._request(self._pending_request)

        return_code = await self._process.wait()
        logger.debug(LogTemplates.PROCESS_EXITED, self._process.pid, return_code)
        self._finish(ProcessExited(return_code=return_code))

    def _request(self, kind: str) -> None:
        if self._terminated:
            return

        process = self._process
        if process is None:
            if self._pending_request != "kill":
                self._pending_request = kind
            return
        if process.returncode is not None:
            return

        try:
            if _HAS_PROCESS_GROUPS:
                sig = signal.SIGKILL if kind == "kill" else signal.SIGTERM
                os.killpg(process.pid, sig)
            elif kind == "kill":
                process.kill()
            else:
                process.terminate()
        except ProcessLookupError:
            pass
        except OSError as e:
            logger.warning(LogTemplates.PROCESS_SIGNAL_FAILED, process.pid, e)

    def _force_kill_if_alive(self) -> None:
        self._kill_timer = None
        if not self._terminated:
            logger.warning(LogTemplates.PROCESS_FORCE_KILL, self.pid)
            self.terminate_force()

    def _finish(self, event: TerminalEvent) -> None:
        if self._terminated:
            return
        self._terminated = True

        if self._kill_timer is not None:
            self._kill_timer.cancel()
            self._kill_timer = None

        callback, self._on_terminal = self._on_terminal, None
        if callback is not None:
            callback(self, event)

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            task.get_loop().call_exception_handler(
                {"message": LogTemplates.PROCESS_TASK_FAILED, "exception": exc, "task": task}
            )
