"""Tracking of background coroutines owned by one session."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

logger = logging.getLogger(__name__)

Spawn = Callable[[Coroutine[Any, Any, Any], str], asyncio.Task | None]


class BackgroundTasks:
    """Set of asyncio tasks that live as long as the session.

    Keeps a strong reference to every task until it finishes, logs
    unexpected exceptions, and cancels whatever is left on ``close()``.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str = "") -> asyncio.Task | None:
        """Schedule a coroutine on the running loop.

        Args:
            coro: Coroutine to run.
            name: Optional task name for logs.

        Returns:
            The created task, or None once the session is closed.
        """
        if self._closed:
            coro.close()
            logger.debug(f"Dropped task {name or coro!r}: session closed")
            return None

        task = asyncio.get_running_loop().create_task(coro, name=name or None)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Background task '{task.get_name()}' failed: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    async def wait_idle(self) -> None:
        """Wait until every task spawned so far, and any they spawn, has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel outstanding tasks and refuse new ones."""
        self._closed = True
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()
