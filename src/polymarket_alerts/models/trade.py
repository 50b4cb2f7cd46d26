# -*- coding: utf-8 -*-
"""Trade models: raw Data API trade and the enriched alert built from it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional

# Timestamps above this are already in milliseconds
_MS_THRESHOLD = 1e12


def to_iso(ts: float) -> str:
    """Convert a unix timestamp in seconds or milliseconds to ISO-8601 UTC (ms precision)."""
    seconds = ts / 1000.0 if ts > _MS_THRESHOLD else float(ts)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def cash_amount(size: float, price: float) -> float:
    """Return size * price rounded to cents; 0 when the product is not finite."""
    value = size * price
    if not math.isfinite(value):
        return 0.0
    return round(value, 2)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_timestamp(value: Any) -> int:
    ts = _to_float(value)
    return int(ts) if math.isfinite(ts) else 0


@dataclass(frozen=True, slots=True)
class TradeRecord:
    """One trade from the Data API GET /trades feed.

    Only the fields the enrichment pipeline and the alert view need are kept.
    """

    proxy_wallet: str
    condition_id: str
    side: str
    """BUY or SELL as reported, upper-cased; "" when the feed omits it."""
    size: float
    price: float
    timestamp: int
    """Unix timestamp, seconds (milliseconds tolerated)."""
    transaction_hash: Optional[str] = None
    title: str = ""
    outcome: Optional[str] = None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> TradeRecord:
        """Build from a raw GET /trades item (camelCase)."""
        return cls(
            proxy_wallet=str(response.get("proxyWallet") or ""),
            condition_id=str(response.get("conditionId") or ""),
            side=str(response.get("side") or "").strip().upper(),
            size=_to_float(response.get("size")),
            price=_to_float(response.get("price")),
            timestamp=_to_timestamp(response.get("timestamp")),
            transaction_hash=response.get("transactionHash") or None,
            title=str(response.get("title") or ""),
            outcome=response.get("outcome") or None,
        )

    @property
    def market_label(self) -> str:
        return f"{self.title} — {self.outcome}" if self.outcome else self.title


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    """Topical classification of a market, derived from its event's tag slugs."""

    category: str = "Other"
    subcategory: str = "Other"
    tag_slugs: tuple[str, ...] = ()


UNCATEGORIZED = CategoryInfo()


@dataclass(frozen=True, slots=True)
class EnrichedTradeRecord:
    """Trade alert handed to the presentation layer."""

    id: str
    wallet_address: str
    market: str
    side: str
    amount_usd: float
    timestamp: str
    note: str
    created_at: Optional[str] = None
    """Wallet creation time (ISO-8601), None when unknown."""
    category: str = "Other"
    subcategory: str = "Other"
    tag_slugs: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_trade(cls, trade: TradeRecord, index: int) -> EnrichedTradeRecord:
        """Placeholder alert for a trade; wallet birth and category are filled in later."""
        alert_id = (
            f"{trade.transaction_hash}-{index}"
            if trade.transaction_hash
            else f"{trade.proxy_wallet}-{trade.timestamp}-{index}"
        )
        return cls(
            id=alert_id,
            wallet_address=trade.proxy_wallet,
            market=trade.market_label,
            side=trade.side,
            amount_usd=cash_amount(trade.size, trade.price),
            timestamp=to_iso(trade.timestamp),
            note=f"cond:{trade.condition_id}",
        )

    def with_enrichment(
        self,
        created_at: Optional[str],
        category: CategoryInfo,
    ) -> EnrichedTradeRecord:
        return replace(
            self,
            created_at=created_at,
            category=category.category,
            subcategory=category.subcategory,
            tag_slugs=category.tag_slugs,
        )

    def to_dict(self) -> dict[str, Any]:
        """camelCase dict, the shape the alert table consumes."""
        return {
            "id": self.id,
            "walletAddress": self.wallet_address,
            "market": self.market,
            "side": self.side,
            "amountUSD": self.amount_usd,
            "timestamp": self.timestamp,
            "note": self.note,
            "createdAt": self.created_at,
            "category": self.category,
            "subcategory": self.subcategory,
            "tagSlugs": list(self.tag_slugs),
        }
