"""Blocking prompt reads bridged onto the event loop."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


def _resolve(future: asyncio.Future[Any], result: Any, error: BaseException | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


async def read_in_thread(prompt: Callable[[], T]) -> T:
    """Run a blocking prompt on a daemon thread and await its answer.

    The loop keeps processing player events while the user is typing. A
    daemon thread is used so a pending prompt never holds up interpreter exit.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def worker() -> None:
        result: Any = None
        error: BaseException | None = None
        try:
            result = prompt()
        except BaseException as e:
            error = e
        try:
            loop.call_soon_threadsafe(_resolve, future, result, error)
        except RuntimeError:
            # Loop already closed; nobody is waiting for the answer.
            pass

    threading.Thread(target=worker, name="menu-input", daemon=True).start()
    return await future
