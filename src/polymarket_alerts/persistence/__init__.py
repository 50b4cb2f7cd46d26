"""Persistence layer (caches and their durable snapshot stores)."""

from polymarket_alerts.persistence.cache import (
    CacheEntry,
    CacheLookup,
    FlushScheduler,
    InflightRegistry,
    TieredCache,
    TtlPolicy,
)
from polymarket_alerts.persistence.stores import (
    InMemorySnapshotStore,
    ISnapshotStore,
    JsonFileSnapshotStore,
)

__all__ = [
    "CacheEntry",
    "CacheLookup",
    "FlushScheduler",
    "InflightRegistry",
    "ISnapshotStore",
    "InMemorySnapshotStore",
    "JsonFileSnapshotStore",
    "TieredCache",
    "TtlPolicy",
]
