"""Sharing of in-flight requests between callers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RequestCoalescer(Generic[T]):
    """Merges concurrent requests for the same key into one call.

    The first caller for a key starts a task; callers arriving while it
    runs await the same task. Waiters are shielded, so cancelling one of
    them does not cancel the shared call for the others. The entry is
    dropped as soon as the task finishes.
    """

    def __init__(self) -> None:
        self._in_flight: dict[str, asyncio.Task[T]] = {}

    async def run(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        replace: bool = False,
    ) -> T:
        """Run ``factory`` for key unless a call is already in flight.

        Args:
            key: The cache key identifying the request.
            factory: Produces the awaitable doing the actual work.
            replace: Always start a new call. Callers arriving later join
                it; callers already waiting keep the older call.

        Returns:
            The shared result.
        """
        task = None if replace else self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            logger.debug("Joining in-flight request for %s", key)
        return await asyncio.shield(task)

    def is_in_flight(self, key: str) -> bool:
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    def _forget(self, key: str, task: "asyncio.Task[T]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
