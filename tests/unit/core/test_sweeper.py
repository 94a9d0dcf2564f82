"""Tests for BackgroundSweeper."""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest
from fakes import FakeClock

from fetchcache.core.services.sweeper import BackgroundSweeper
from fetchcache.infrastructure.storage.memory import MemoryStorage
from fetchcache.infrastructure.stores.durable_store import DurableStore
from fetchcache.infrastructure.stores.ttl_store import TTLStore


class TestBackgroundSweeper:
    """Tests for BackgroundSweeper."""

    def test_sweep_once(self, clock: FakeClock) -> None:
        """Test that one sweep purges expired entries from every store."""
        fast = TTLStore(clock=clock)
        negative = TTLStore(clock=clock)
        fast.set("a", 1, 10)
        fast.set("b", 2, 100)
        negative.set("a:error", True, 30)

        clock.advance(50)
        sweeper = BackgroundSweeper([fast, negative])

        assert sweeper.sweep_once() == 2
        assert fast.keys() == ["b"]
        assert len(negative) == 0

    @pytest.mark.asyncio
    async def test_start_sweeps_durable_once(self, clock: FakeClock) -> None:
        """Test that starting purges expired durable records."""
        durable = DurableStore(MemoryStorage(), clock=clock)
        durable.set("old", "x", 10)
        durable.set("new", "y", 1000)
        clock.advance(20)

        sweeper = BackgroundSweeper([], durable=durable, interval=60)
        await sweeper.start()
        try:
            assert len(durable) == 1
            assert durable.get("new") == "y"
        finally:
            await sweeper.stop()

    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        """Test the running flag across the lifecycle."""
        sweeper = BackgroundSweeper([TTLStore()], interval=60)
        assert not sweeper.running

        await sweeper.start()
        assert sweeper.running

        await sweeper.stop()
        assert not sweeper.running

    @pytest.mark.asyncio
    async def test_start_twice_is_noop(self) -> None:
        """Test that a second start keeps the running task."""
        durable = MagicMock()
        durable.cleanup.return_value = 0
        sweeper = BackgroundSweeper([], durable=durable, interval=60)

        await sweeper.start()
        await sweeper.start()
        await sweeper.stop()

        durable.cleanup.assert_called_once()

    @pytest.mark.asyncio
    async def test_stop_without_start(self) -> None:
        """Test that stopping an idle sweeper is harmless."""
        await BackgroundSweeper([]).stop()

    @pytest.mark.asyncio
    async def test_periodic_sweep(self, clock: FakeClock) -> None:
        """Test that the task sweeps on its interval."""
        store = TTLStore(clock=clock)
        store.set("a", 1, 5)
        clock.advance(10)

        sweeper = BackgroundSweeper([store], interval=0.01)
        await sweeper.start()
        await asyncio.sleep(0.05)
        await sweeper.stop()

        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_failing_sweep_keeps_running(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a failing sweep is logged and the loop continues."""
        store = MagicMock()
        calls = iter([RuntimeError("boom")])

        def cleanup() -> int:
            error = next(calls, None)
            if error is not None:
                raise error
            return 0

        store.cleanup.side_effect = cleanup

        sweeper = BackgroundSweeper([store], interval=0.01)
        with caplog.at_level(logging.ERROR):
            await sweeper.start()
            await asyncio.sleep(0.05)
            assert sweeper.running
            await sweeper.stop()

        assert store.cleanup.call_count >= 2
        assert "Cache sweep failed" in caplog.text
