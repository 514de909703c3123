"""Serializing helper for stateful generators and plugins.

The engine never locks shared state on its own: two concurrent requests
that read-then-write ``state`` can lose an update. Code that needs
cross-request exclusivity wraps the critical section in an ``AsyncMutex``::

    counter_lock = AsyncMutex()

    async def increment(ctx):
        async def bump():
            ctx.state["count"] = ctx.state.get("count", 0) + 1
            return ctx.state["count"]
        return await counter_lock.run(bump)

Tasks run one at a time in the order they were queued. A task that raises
releases the mutex just like one that succeeds, and the error propagates
to its own caller only. Queuing never blocks: callers can keep calling
``run()`` while earlier tasks are still pending.
"""

from collections.abc import Callable
from typing import Any

import anyio

from fauxapi._internal.invoke import invoke


class AsyncMutex:
    """FIFO-fair exclusive section built on ``anyio.Lock``."""

    __slots__ = ("_lock", "_pending")

    def __init__(self) -> None:
        self._lock = anyio.Lock()
        self._pending = 0

    @property
    def locked(self) -> bool:
        """Whether a task currently holds the mutex."""
        return self._lock.locked()

    @property
    def pending(self) -> int:
        """Number of tasks running or waiting."""
        return self._pending

    async def run(self, task: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run *task* exclusively and return its result."""
        self._pending += 1
        try:
            async with self._lock:
                return await invoke(task, *args, **kwargs)
        finally:
            self._pending -= 1


def create_mutex() -> AsyncMutex:
    return AsyncMutex()
