# ABOUTME: Single-slot debouncer built on asyncio tasks.
# ABOUTME: Each schedule() cancels whatever is pending, so only the last call in a burst runs.

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Delay an async call until ``delay`` seconds pass without another schedule().

    At most one task is pending at a time. Cancelling a task that has already
    started its call cancels the call too.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, func: Callable[..., Awaitable[Any]], *args: Any) -> asyncio.Task:
        """Replace any pending call with ``func(*args)`` after the delay. Needs a running loop."""
        self.cancel()
        self._task = asyncio.create_task(self._run(func, *args))
        self._task.add_done_callback(_log_failure)
        return self._task

    def cancel(self) -> None:
        if self.pending:
            logger.debug("Cancelling pending debounced call")
            self._task.cancel()
        self._task = None

    async def _run(self, func: Callable[..., Awaitable[Any]], *args: Any) -> Any:
        await asyncio.sleep(self.delay)
        return await func(*args)


def _log_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Debounced call failed", exc_info=exc)
