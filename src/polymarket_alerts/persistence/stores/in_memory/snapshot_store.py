# -*- coding: utf-8 -*-
"""In-memory snapshot store (tests, ephemeral runs)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Generic, TypeVar

from polymarket_alerts.persistence.cache.entry import CacheEntry
from polymarket_alerts.persistence.stores.interfaces.snapshot_store import ISnapshotStore

V = TypeVar("V")


class InMemorySnapshotStore(ISnapshotStore[V], Generic[V]):
    """In-memory implementation of ISnapshotStore; counts saves."""

    def __init__(self, initial: Mapping[str, CacheEntry[V]] | None = None) -> None:
        self._entries: dict[str, CacheEntry[V]] = dict(initial or {})
        self.save_count = 0

    @property
    def entries(self) -> dict[str, CacheEntry[V]]:
        return dict(self._entries)

    async def load(self) -> dict[str, CacheEntry[V]]:
        return dict(self._entries)

    async def save(self, entries: Mapping[str, CacheEntry[V]]) -> None:
        self._entries = dict(entries)
        self.save_count += 1
