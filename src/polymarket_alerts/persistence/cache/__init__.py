"""Cache primitives: entries and TTL policy, tiered cache, flush scheduler, in-flight registry."""

from polymarket_alerts.persistence.cache.entry import CacheEntry, CacheLookup, TtlPolicy
from polymarket_alerts.persistence.cache.flush_scheduler import FlushScheduler
from polymarket_alerts.persistence.cache.inflight import InflightRegistry
from polymarket_alerts.persistence.cache.tiered_cache import TieredCache, epoch_ms

__all__ = [
    "CacheEntry",
    "CacheLookup",
    "FlushScheduler",
    "InflightRegistry",
    "TieredCache",
    "TtlPolicy",
    "epoch_ms",
]
