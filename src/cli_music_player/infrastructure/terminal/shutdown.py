"""Process-wide shutdown wiring: OS signals, fault hooks and the exit hook.

Every path funnels into the session controller's ``cleanup`` before the
process is allowed to exit:

- SIGINT/SIGTERM/SIGHUP/SIGQUIT: cleanup, wait ``exit_delay_seconds`` so the
  player can terminate gracefully, force-kill leftovers, exit code 0.
- Unobserved task exceptions and uncaught faults: cleanup, force-kill, exit code 1.
- Interpreter exit: cleanup (idempotent).
"""

from __future__ import annotations

import asyncio
import atexit
import logging
import signal
import sys
import threading
from types import TracebackType
from typing import TYPE_CHECKING, Any

from cli_music_player.domain.shared.events import ShutdownRequested
from cli_music_player.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from cli_music_player.application.services.session_controller import SessionController
    from cli_music_player.domain.shared.events import EventBus

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS: tuple[str, ...] = ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT")


class ShutdownCoordinator:
    """Installs the shutdown handlers once and reports the requested exit code."""

    def __init__(
        self,
        *,
        session_controller: SessionController,
        event_bus: EventBus,
        exit_delay_seconds: float = 1.0,
    ) -> None:
        self._controller = session_controller
        self._event_bus = event_bus
        self._exit_delay_seconds = exit_delay_seconds

        self._loop: asyncio.AbstractEventLoop | None = None
        self._exit_code: asyncio.Future[int] | None = None
        self._exit_task: asyncio.Task[None] | None = None
        self._installed_signals: list[signal.Signals] = []
        self._previous_excepthook: Any = None
        self._previous_threading_excepthook: Any = None
        self._atexit_registered = False

    @property
    def is_installed(self) -> bool:
        return self._loop is not None

    @property
    def installed_signals(self) -> tuple[signal.Signals, ...]:
        return tuple(self._installed_signals)

    def install(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        loop = loop or asyncio.get_running_loop()
        self._loop = loop
        self._exit_code = loop.create_future()

        for name in SHUTDOWN_SIGNALS:
            sig = getattr(signal, name, None)
            if sig is None:
                logger.debug(LogTemplates.SIGNAL_HANDLER_UNAVAILABLE, name)
                continue
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except (NotImplementedError, RuntimeError, ValueError):
                logger.debug(LogTemplates.SIGNAL_HANDLER_UNAVAILABLE, name)
                continue
            self._installed_signals.append(sig)

        loop.set_exception_handler(self._on_loop_exception)

        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._on_uncaught_exception
        self._previous_threading_excepthook = threading.excepthook
        threading.excepthook = self._on_thread_exception

        if not self._atexit_registered:
            atexit.register(self._controller.cleanup)
            self._atexit_registered = True

    def uninstall(self) -> None:
        """Restore the handlers replaced by :meth:`install`; the exit hook stays."""
        if self._loop is None:
            return

        for sig in self._installed_signals:
            self._loop.remove_signal_handler(sig)
        self._installed_signals.clear()
        self._loop.set_exception_handler(None)

        if self._previous_excepthook is not None:
            sys.excepthook = self._previous_excepthook
        if self._previous_threading_excepthook is not None:
            threading.excepthook = self._previous_threading_excepthook
        self._loop = None

    async def wait(self) -> int:
        """Resolve with the exit code requested by a signal or a fault."""
        if self._exit_code is None:
            raise RuntimeError(ErrorMessages.SHUTDOWN_NOT_INSTALLED)
        return await self._exit_code

    async def settle(self) -> None:
        """Give retired players the exit delay to stop, then force-kill the rest."""
        if self._controller.has_retired_processes:
            await asyncio.sleep(self._exit_delay_seconds)
        self._controller.reap()

    # ── Handlers ────────────────────────────────────────────────────

    def _on_signal(self, sig: signal.Signals) -> None:
        logger.warning(LogTemplates.SIGNAL_RECEIVED, sig.name)
        if self._exit_task is not None or self._is_resolved():
            return

        self._event_bus.publish(ShutdownRequested(reason=sig.name, exit_code=0))
        self._controller.cleanup()

        self._exit_task = asyncio.get_running_loop().create_task(self._exit_after_delay(0))

    async def _exit_after_delay(self, exit_code: int) -> None:
        logger.info(LogTemplates.SHUTDOWN_EXIT_SCHEDULED, exit_code, self._exit_delay_seconds)
        await asyncio.sleep(self._exit_delay_seconds)
        self._controller.reap()
        self._resolve(exit_code)

    def _on_loop_exception(
        self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]
    ) -> None:
        exc = context.get("exception")
        if exc is None:
            loop.default_exception_handler(context)
            return

        logger.error(
            LogTemplates.UNHANDLED_ASYNC_ERROR,
            context.get("message", type(exc).__name__),
            exc_info=exc,
        )
        self.fail(repr(exc))

    def _on_uncaught_exception(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        logger.critical(LogTemplates.UNCAUGHT_EXCEPTION, exc_info=(exc_type, exc, tb))
        self._controller.cleanup()
        self._controller.reap()
        if self._previous_excepthook is not None:
            self._previous_excepthook(exc_type, exc, tb)

    def _on_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        logger.critical(
            LogTemplates.UNCAUGHT_EXCEPTION,
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )
        reason = repr(args.exc_value) if args.exc_value is not None else args.exc_type.__name__
        loop = self._loop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(self.fail, reason)

    def fail(self, reason: str) -> None:
        """Fatal fault: clean up immediately and request exit code 1."""
        if self._is_resolved():
            return

        self._event_bus.publish(ShutdownRequested(reason=reason, exit_code=1))
        self._controller.cleanup()
        self._controller.reap()
        if self._exit_task is not None:
            self._exit_task.cancel()
        self._resolve(1)

    def _is_resolved(self) -> bool:
        return self._exit_code is not None and self._exit_code.done()

    def _resolve(self, exit_code: int) -> None:
        if self._exit_code is not None and not self._exit_code.done():
            self._exit_code.set_result(exit_code)
