"""Abstract interface for durable cache snapshots (JSON file, DB, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Generic, TypeVar

from polymarket_alerts.persistence.cache.entry import CacheEntry

V = TypeVar("V")


class ISnapshotStore(ABC, Generic[V]):
    """Interface for loading and overwriting a whole cache snapshot."""

    @abstractmethod
    async def load(self) -> dict[str, CacheEntry[V]]:
        """Return persisted entries; an empty dict if nothing was persisted yet.

        Raises:
            CacheStoreError: If a snapshot exists but cannot be read or parsed.
        """
        ...

    @abstractmethod
    async def save(self, entries: Mapping[str, CacheEntry[V]]) -> None:
        """Replace the snapshot with `entries` (not an append).

        Raises:
            CacheStoreError: If the snapshot cannot be written.
        """
        ...
