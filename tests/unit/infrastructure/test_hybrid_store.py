"""Tests for HybridStore."""

import pytest
from fakes import FakeClock

from fetchcache.infrastructure.storage.memory import MemoryStorage
from fetchcache.infrastructure.stores import DurableStore, HybridStore, TTLStore


def make_hybrid(storage: MemoryStorage, clock: FakeClock, **kwargs) -> HybridStore:
    return HybridStore(
        TTLStore(maxsize=10, clock=clock),
        DurableStore(storage, clock=clock),
        **kwargs,
    )


class TestHybridStore:
    """Tests for HybridStore."""

    @pytest.fixture
    def hybrid(self, storage: MemoryStorage, clock: FakeClock) -> HybridStore:
        return make_hybrid(storage, clock, refill_ttl=300)

    def test_set_writes_both_stores(self, hybrid: HybridStore) -> None:
        """Test write-through."""
        hybrid.set("k", {"v": 1}, fast_ttl=60, durable_ttl=3600)

        assert hybrid.fast.get("k") == {"v": 1}
        assert hybrid.durable.get("k") == {"v": 1}

    def test_fast_hit(self, hybrid: HybridStore) -> None:
        """Test that the fast store answers first."""
        hybrid.set("k", "v")
        assert hybrid.get("k") == "v"
        assert hybrid.stats["fast_hits"] == 1

    def test_reload_served_from_durable(
        self, storage: MemoryStorage, clock: FakeClock
    ) -> None:
        """Test that a fresh hybrid store over the same storage finds the value."""
        make_hybrid(storage, clock).set("k", "v")

        reloaded = make_hybrid(storage, clock)
        assert len(reloaded.fast) == 0

        assert reloaded.get("k") == "v"
        assert reloaded.fast.get("k") == "v"
        assert reloaded.stats["durable_hits"] == 1

    def test_refill_uses_shorter_ttl(
        self, storage: MemoryStorage, clock: FakeClock
    ) -> None:
        """Test that a promoted value only lives refill_ttl in memory."""
        make_hybrid(storage, clock).set("k", "v", fast_ttl=60, durable_ttl=86400)

        reloaded = make_hybrid(storage, clock, refill_ttl=30)
        reloaded.get("k")
        entry = reloaded.fast.get_entry("k")

        assert entry is not None
        assert entry.expires_at == clock.now + 30

    def test_refill_capped_at_remaining_lifetime(
        self, storage: MemoryStorage, clock: FakeClock
    ) -> None:
        """Test that a promoted value never outlives its durable record."""
        make_hybrid(storage, clock).set("k", "v", fast_ttl=60, durable_ttl=60)
        clock.advance(50)

        reloaded = make_hybrid(storage, clock, refill_ttl=300)
        assert reloaded.get("k") == "v"
        entry = reloaded.fast.get_entry("k")

        assert entry is not None
        assert entry.expires_at == pytest.approx(clock.now + 10)

        clock.advance(11)
        assert reloaded.get("k") is None

    def test_fast_expiry_falls_back_to_durable(
        self, hybrid: HybridStore, clock: FakeClock
    ) -> None:
        """Test read-through after the fast entry expired."""
        hybrid.set("k", "v", fast_ttl=10, durable_ttl=1000)
        clock.advance(20)

        assert hybrid.get("k") == "v"
        assert hybrid.stats["durable_hits"] == 1

    def test_miss(self, hybrid: HybridStore) -> None:
        """Test a miss in both stores."""
        assert hybrid.get("missing", "default") == "default"
        assert hybrid.stats == {
            "fast_hits": 0,
            "durable_hits": 0,
            "misses": 1,
            "total": 1,
        }

    def test_has_does_not_promote(
        self, storage: MemoryStorage, clock: FakeClock
    ) -> None:
        """Test that has checks both stores without writing."""
        make_hybrid(storage, clock).set("k", "v")
        reloaded = make_hybrid(storage, clock)

        assert reloaded.has("k") is True
        assert len(reloaded.fast) == 0

    def test_delete_propagates(self, hybrid: HybridStore) -> None:
        """Test delete removes from both stores."""
        hybrid.set("k", "v")

        assert hybrid.delete("k") is True
        assert hybrid.fast.get("k") is None
        assert hybrid.durable.get("k") is None
        assert hybrid.delete("k") is False

    def test_clear_propagates(self, hybrid: HybridStore) -> None:
        """Test clear empties both stores and resets statistics."""
        hybrid.set("a", 1)
        hybrid.get("a")

        hybrid.clear()

        assert len(hybrid.fast) == 0
        assert len(hybrid.durable) == 0
        assert hybrid.stats["total"] == 0
