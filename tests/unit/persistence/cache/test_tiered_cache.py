# -*- coding: utf-8 -*-
"""Unit tests for TieredCache and TtlPolicy."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Optional
from unittest.mock import AsyncMock

from polymarket_alerts.exceptions import CacheStoreError
from polymarket_alerts.persistence.cache import CacheEntry, TieredCache, TtlPolicy
from polymarket_alerts.persistence.stores.in_memory import InMemorySnapshotStore

DAY = 24 * 60 * 60
HOUR = 60 * 60


def test_ttl_policy_picks_negative_bucket_for_none() -> None:
    policy: TtlPolicy[Optional[str]] = TtlPolicy(positive_seconds=DAY, negative_seconds=HOUR)

    assert policy("2024-01-01T00:00:00.000Z") == DAY
    assert policy(None) == HOUR


def test_ttl_policy_flat_ignores_value() -> None:
    policy: TtlPolicy[tuple[str, ...]] = TtlPolicy.flat(600)

    assert policy(()) == 600
    assert policy(("politics",)) == 600


async def test_get_miss_is_not_fresh(birth_cache: TieredCache[Optional[str]]) -> None:
    lookup = await birth_cache.get("0xabc")

    assert lookup.hit is False
    assert lookup.is_fresh is False
    assert lookup.value is None


async def test_positive_entry_fresh_until_boundary(
    birth_cache: TieredCache[Optional[str]],
    clock: Any,
) -> None:
    await birth_cache.put("0xabc", "2024-01-01T00:00:00.000Z")

    clock.now_ms += DAY * 1000 - 1
    assert (await birth_cache.get("0xabc")).is_fresh is True

    clock.now_ms += 1
    lookup = await birth_cache.get("0xabc")
    assert lookup.is_fresh is False
    assert lookup.hit is True
    assert lookup.value == "2024-01-01T00:00:00.000Z"


async def test_negative_entry_uses_short_ttl(
    birth_cache: TieredCache[Optional[str]],
    clock: Any,
) -> None:
    await birth_cache.put("0xabc", None)

    clock.advance(HOUR - 1)
    assert (await birth_cache.get("0xabc")).is_fresh is True

    clock.advance(1)
    assert (await birth_cache.get("0xabc")).is_fresh is False


async def test_get_accepts_caller_ttl(
    birth_cache: TieredCache[Optional[str]],
    clock: Any,
) -> None:
    await birth_cache.put("0xabc", "2024-01-01T00:00:00.000Z")
    clock.advance(120)

    assert (await birth_cache.get("0xabc", ttl=lambda _v: 60)).is_fresh is False


async def test_put_overwrites_and_restamps(
    birth_cache: TieredCache[Optional[str]],
    clock: Any,
) -> None:
    await birth_cache.put("0xabc", None)
    clock.advance(10)
    await birth_cache.put("0xabc", "2024-01-01T00:00:00.000Z")

    entry = await birth_cache.entry("0xabc")
    assert entry is not None
    assert entry.value == "2024-01-01T00:00:00.000Z"
    assert entry.written_at_ms == clock()


async def test_memory_layer_is_bounded(clock: Any) -> None:
    cache: TieredCache[str] = TieredCache("t", TtlPolicy.flat(60), max_memory_entries=2, clock=clock)

    await cache.put("a", "1")
    await cache.put("b", "2")
    await cache.put("c", "3")

    assert len(cache) == 2
    assert (await cache.get("a")).hit is False


async def test_load_from_store_merges_once_and_keeps_newer_memory_entries(clock: Any) -> None:
    store: InMemorySnapshotStore[Optional[str]] = InMemorySnapshotStore(
        {
            "0xa": CacheEntry(value="2020-01-01T00:00:00.000Z", written_at_ms=clock() - 1000),
            "0xb": CacheEntry(value=None, written_at_ms=clock() - 2000),
        }
    )
    cache: TieredCache[Optional[str]] = TieredCache(
        "wallet_birth", TtlPolicy(DAY, HOUR), store=store, clock=clock
    )
    await cache.put("0xa", "2021-01-01T00:00:00.000Z")

    merged = await cache.load_from_store()

    assert merged == 1
    assert (await cache.get("0xa")).value == "2021-01-01T00:00:00.000Z"
    assert (await cache.get("0xb")).hit is True
    assert await cache.load_from_store() == 0


async def test_load_from_store_ignores_unreadable_snapshot(clock: Any) -> None:
    store: Any = SimpleNamespace(
        load=AsyncMock(side_effect=CacheStoreError("malformed cache snapshot")),
        save=AsyncMock(),
    )
    cache: TieredCache[Optional[str]] = TieredCache(
        "wallet_birth", TtlPolicy(DAY, HOUR), store=store, clock=clock
    )

    assert await cache.load_from_store() == 0
    assert len(cache) == 0


async def test_flush_keeps_most_recent_entries(clock: Any) -> None:
    store: InMemorySnapshotStore[str] = InMemorySnapshotStore()
    cache: TieredCache[str] = TieredCache(
        "t", TtlPolicy.flat(60), store=store, max_persisted_entries=2, clock=clock
    )
    for key in ("a", "b", "c"):
        await cache.put(key, key.upper())
        clock.advance(1)
    # Rewriting "a" makes it the most recent entry
    await cache.put("a", "A2")

    await cache.flush()

    assert set(store.entries) == {"a", "c"}
    assert store.entries["a"].value == "A2"


async def test_schedule_flush_is_debounced(
    birth_cache: TieredCache[Optional[str]],
    birth_store: InMemorySnapshotStore[Optional[str]],
) -> None:
    await birth_cache.put("0xabc", None)

    assert birth_cache.schedule_flush() is True
    assert birth_cache.schedule_flush() is False
    await birth_cache.flusher.wait()

    assert birth_store.save_count == 1
    assert "0xabc" in birth_store.entries
    assert birth_cache.schedule_flush() is True
    await birth_cache.flusher.wait()
    assert birth_store.save_count == 2


async def test_schedule_flush_without_store_is_noop(clock: Any) -> None:
    cache: TieredCache[str] = TieredCache("t", TtlPolicy.flat(60), clock=clock)

    assert cache.schedule_flush() is False
    await cache.flush()


async def test_aclose_writes_pending_flush_immediately(
    clock: Any,
) -> None:
    store: InMemorySnapshotStore[Optional[str]] = InMemorySnapshotStore()
    cache: TieredCache[Optional[str]] = TieredCache(
        "wallet_birth", TtlPolicy(DAY, HOUR), store=store, flush_delay_seconds=60, clock=clock
    )
    await cache.put("0xabc", "2024-01-01T00:00:00.000Z")
    cache.schedule_flush()

    await cache.aclose()

    assert store.save_count == 1
    assert cache.flusher.pending is False
