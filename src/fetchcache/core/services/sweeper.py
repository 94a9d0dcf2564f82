"""Background sweeper for expired cache entries."""

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from datetime import timedelta

from fetchcache.core.entities.cache_entry import ttl_seconds
from fetchcache.core.interfaces.store import IStore

logger = logging.getLogger(__name__)


class BackgroundSweeper:
    """Periodically purges expired entries from in-process stores.

    Read and write paths only expire entries lazily; the sweeper keeps
    entries that are never read again from piling up. The durable store
    is swept once when the sweeper starts.
    """

    def __init__(
        self,
        stores: Sequence[IStore],
        durable: IStore | None = None,
        interval: timedelta | float = timedelta(seconds=60),
    ) -> None:
        """Initialize the sweeper.

        Args:
            stores: Stores swept on every tick.
            durable: Store swept once at start.
            interval: Time between sweeps.
        """
        self._stores = list(stores)
        self._durable = durable
        self._interval = ttl_seconds(interval)
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Sweep durable storage once and start the periodic task.

        Calling ``start`` on a running sweeper does nothing.
        """
        if self.running:
            return
        if self._durable is not None:
            removed = self._durable.cleanup()
            logger.debug("Startup sweep removed %d durable records", removed)
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancel the periodic task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def sweep_once(self) -> int:
        """Purge expired entries from every store.

        Returns:
            Number of entries removed.
        """
        return sum(store.cleanup() for store in self._stores)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                removed = self.sweep_once()
            except Exception:
                logger.exception("Cache sweep failed")
                continue
            logger.debug("Sweep removed %d expired entries", removed)
