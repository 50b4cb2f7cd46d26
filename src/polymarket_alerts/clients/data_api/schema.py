"""Data API response types (OpenAPI schema alignment)."""

from __future__ import annotations

from typing import Literal, TypedDict


class TradeSchema(TypedDict, total=False):
    """GET /trades item (Trade schema). Keys match API response (camelCase)."""

    proxyWallet: str
    side: Literal["BUY", "SELL"]
    asset: str
    conditionId: str
    size: float
    price: float
    timestamp: int
    title: str
    slug: str
    icon: str
    eventSlug: str
    outcome: str
    outcomeIndex: int
    name: str
    pseudonym: str
    transactionHash: str
