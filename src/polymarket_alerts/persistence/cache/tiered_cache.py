# -*- coding: utf-8 -*-
"""Two-tier cache: bounded in-memory map backed by a debounced durable snapshot."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Generic, Optional, TypeVar

import structlog
from cachetools import LRUCache
from structlog.contextvars import bound_contextvars

from polymarket_alerts.exceptions import CacheStoreError
from polymarket_alerts.persistence.cache.entry import CacheEntry, CacheLookup
from polymarket_alerts.persistence.cache.flush_scheduler import FlushScheduler
from polymarket_alerts.persistence.stores.interfaces.snapshot_store import ISnapshotStore

V = TypeVar("V")


def epoch_ms() -> int:
    """Wall-clock now in epoch milliseconds."""
    return int(time.time() * 1000)


class TieredCache(Generic[V]):
    """key -> (value, written_at) store with lazy TTL expiry and optional persistence.

    Entries are never deleted explicitly: staleness is decided on read with the
    TTL policy (or a caller-supplied TTL function), and the memory layer is
    bounded with cachetools.LRUCache. With a store, schedule_flush() debounces
    writes of the `max_persisted_entries` most recently written entries.
    All map access goes through one asyncio.Lock.
    """

    def __init__(
        self,
        name: str,
        ttl: Callable[[V], float],
        *,
        store: Optional[ISnapshotStore[V]] = None,
        flush_delay_seconds: float = 0.8,
        max_persisted_entries: int = 5000,
        max_memory_entries: int = 50_000,
        clock: Callable[[], int] = epoch_ms,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            name: Cache domain name, used in logs (e.g. "wallet_birth").
            ttl: Default TTL function, value -> seconds (e.g. a TtlPolicy).
            store: Durable snapshot store; None for a memory-only cache.
            flush_delay_seconds: Debounce delay of schedule_flush().
            max_persisted_entries: Number of most recent entries written per flush.
            max_memory_entries: Bound of the in-memory layer (LRU eviction).
            clock: Epoch-milliseconds clock (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._name = name
        self._ttl = ttl
        self._store = store
        self._max_persisted = max(1, max_persisted_entries)
        self._clock = clock
        self._entries: LRUCache[str, CacheEntry[V]] = LRUCache(maxsize=max(1, max_memory_entries))
        self._lock = asyncio.Lock()
        self._loaded = False
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._flusher = FlushScheduler(
            self.flush,
            delay_seconds=flush_delay_seconds,
            get_logger=get_logger,
            logger_name=f"{logger_name or self.__class__.__name__}.flush",
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def flusher(self) -> FlushScheduler:
        return self._flusher

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str, ttl: Optional[Callable[[V], float]] = None) -> CacheLookup[V]:
        """Return the cached value for key and whether it is still fresh.

        A miss is (None, is_fresh=False, hit=False).
        """
        ttl_fn = ttl or self._ttl
        async with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return CacheLookup(value=None, is_fresh=False)
        fresh = entry.is_fresh(self._clock(), ttl_fn(entry.value))
        return CacheLookup(value=entry.value, is_fresh=fresh, hit=True)

    async def entry(self, key: str) -> Optional[CacheEntry[V]]:
        """Raw entry (value and write time), mostly for diagnostics and tests."""
        async with self._lock:
            return self._entries.get(key)

    async def put(self, key: str, value: V) -> None:
        """Write value for key, overwriting any previous entry, stamped with now."""
        entry = CacheEntry(value=value, written_at_ms=self._clock())
        async with self._lock:
            # Re-insert so iteration order follows write order
            self._entries.pop(key, None)
            self._entries[key] = entry

    async def load_from_store(self) -> int:
        """Merge the persisted snapshot into memory. Runs once; later calls are no-ops.

        A missing snapshot is normal on first start. An unreadable one is logged
        and ignored. Entries already in memory are newer and are kept.

        Returns:
            Number of entries merged.
        """
        if self._loaded or self._store is None:
            return 0
        self._loaded = True
        with bound_contextvars(cache_name=self._name):
            try:
                persisted = await self._store.load()
            except CacheStoreError as e:
                self._logger.warning(
                    "cache_load_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                return 0

            merged = 0
            async with self._lock:
                for key, entry in sorted(persisted.items(), key=lambda kv: kv[1].written_at_ms):
                    if key in self._entries:
                        continue
                    self._entries[key] = entry
                    merged += 1
            self._logger.debug("cache_loaded", cache_loaded_count=merged)
            return merged

    def schedule_flush(self) -> bool:
        """Debounced flush to the store; no-op when memory-only or already pending."""
        if self._store is None:
            return False
        return self._flusher.schedule()

    async def flush(self) -> None:
        """Write the most recent entries to the store right now.

        Raises:
            CacheStoreError: If the store cannot be written.
        """
        if self._store is None:
            return
        async with self._lock:
            recent = sorted(self._entries.items(), key=lambda kv: kv[1].written_at_ms)
        snapshot = dict(recent[-self._max_persisted :])
        await self._store.save(snapshot)
        self._logger.debug(
            "cache_flushed",
            cache_name=self._name,
            cache_flushed_count=len(snapshot),
            cache_memory_count=len(recent),
        )

    async def aclose(self) -> None:
        """Write out a pending flush and wait for in-progress writes."""
        if self._flusher.pending:
            await self._flusher.flush_now()
        await self._flusher.wait()
