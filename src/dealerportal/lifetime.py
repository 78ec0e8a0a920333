"""Cancellation scope tied to a mounted view."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

from dealerportal.exceptions import DealerPortalError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewLifetime:
    """Owns the background tasks started on behalf of one view.

    Components check :attr:`closed` after every ``await`` before touching
    their state, and :meth:`close` cancels whatever is still pending, so
    a result that arrives after teardown is dropped.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    def spawn(self, coro: Coroutine[Any, Any, T], *, name: str | None = None) -> asyncio.Task[T]:
        """Schedule *coro* on the running loop, owned by this lifetime."""
        if self._closed:
            coro.close()
            raise DealerPortalError("View lifetime is closed")
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Background task %s failed", task.get_name(), exc_info=exc)

    def cancel(self) -> None:
        """Mark closed and cancel pending tasks without waiting."""
        self._closed = True
        for task in list(self._tasks):
            if not task.done():
                task.cancel()

    async def close(self) -> None:
        """Cancel pending tasks and wait for them to unwind."""
        self.cancel()
        tasks = list(self._tasks)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
