"""
Detached task runner for fire-and-forget side effects.

Request handlers hand notification coroutines to ``BackgroundTaskRunner``
after the order is persisted; the response never waits for them.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """
    Spawns coroutines as tasks and keeps them referenced until they finish.

    Anything a task raises is logged here; nothing is re-raised to the
    caller that spawned it. ``drain`` waits for everything in flight and is
    used on shutdown and in tests.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._accepting = True

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    @property
    def is_accepting(self) -> bool:
        return self._accepting

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task[Any] | None:
        """Schedule ``coro`` on the running loop without awaiting it."""
        if not self._accepting:
            logger.warning(f"Task runner is shutting down, dropping task {name or coro!r}")
            coro.close()
            return None

        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug(f"Background task {task.get_name()} cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Background task {task.get_name()} failed: {exc}", exc_info=exc)

    async def drain(self, timeout: float | None = None) -> bool:
        """
        Wait until no task is in flight, including tasks spawned meanwhile.

        Returns False if ``timeout`` expired with tasks still running.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while self._tasks:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                return False
            _, pending = await asyncio.wait(set(self._tasks), timeout=remaining)
            if pending and deadline is not None and loop.time() >= deadline:
                return False
        return True

    async def shutdown(self, timeout: float = 10.0) -> None:
        """Stop accepting work, let running tasks finish, cancel stragglers."""
        self._accepting = False
        if not self._tasks:
            return

        logger.info(f"Waiting for {len(self._tasks)} background task(s) to finish...")
        if await self.drain(timeout):
            return

        stragglers = list(self._tasks)
        logger.warning(f"Cancelling {len(stragglers)} background task(s) still running after {timeout}s")
        for task in stragglers:
            task.cancel()
        await asyncio.gather(*stragglers, return_exceptions=True)
