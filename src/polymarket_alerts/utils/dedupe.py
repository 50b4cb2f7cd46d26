"""Trade identity key and first-seen deduplication."""

from __future__ import annotations

from collections.abc import Iterable

from polymarket_alerts.models.trade import TradeRecord


def trade_key(t: TradeRecord) -> str:
    """Return a stable key identifying a trade.

    Prefers the transaction hash, then a composite of
    wallet|timestamp|side|size|price|conditionId.
    """
    if t.transaction_hash:
        return f"tx:{t.transaction_hash}"
    return f"f:{t.proxy_wallet}|{t.timestamp}|{t.side}|{t.size}|{t.price}|{t.condition_id}"


def dedupe_trades(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Drop trades whose key was already seen, keeping first occurrences in order."""
    seen: set[str] = set()
    unique: list[TradeRecord] = []
    for t in trades:
        k = trade_key(t)
        if k in seen:
            continue
        seen.add(k)
        unique.append(t)
    return unique
