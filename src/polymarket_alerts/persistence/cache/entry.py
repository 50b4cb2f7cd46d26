"""Cache entry and TTL policy shared by every cache domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[V]):
    """A cached value (which may mean "looked up, nothing found") and when it was written."""

    value: V
    written_at_ms: int

    def is_fresh(self, now_ms: int, ttl_seconds: float) -> bool:
        """Fresh while now - written_at < ttl; stale from the boundary on."""
        return now_ms - self.written_at_ms < ttl_seconds * 1000.0


@dataclass(frozen=True, slots=True)
class CacheLookup(Generic[V]):
    """Result of TieredCache.get: the value (None on miss) and whether it is still fresh."""

    value: Optional[V]
    is_fresh: bool
    hit: bool = False


@dataclass(frozen=True, slots=True)
class TtlPolicy(Generic[V]):
    """Two TTLs per domain: a long one for definite answers, a short one for negatives.

    `is_negative` decides which bucket a value falls in; by default None is negative.
    """

    positive_seconds: float
    negative_seconds: float
    is_negative: Callable[[V], bool] = lambda value: value is None

    @classmethod
    def flat(cls, seconds: float) -> TtlPolicy[V]:
        """Same TTL whatever the value."""
        return cls(positive_seconds=seconds, negative_seconds=seconds)

    def __call__(self, value: V) -> float:
        return self.negative_seconds if self.is_negative(value) else self.positive_seconds
