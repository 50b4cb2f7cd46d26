"""Exceptions subpackage."""

from polymarket_alerts.exceptions.exceptions import (
    CacheStoreError,
    PolymarketAPIError,
    PolymarketError,
    RateLimitError,
    RpcError,
)

__all__ = [
    "CacheStoreError",
    "PolymarketAPIError",
    "PolymarketError",
    "RateLimitError",
    "RpcError",
]
