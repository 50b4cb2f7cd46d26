# -*- coding: utf-8 -*-
"""Domain models."""

from polymarket_alerts.models.trade import (
    UNCATEGORIZED,
    CategoryInfo,
    EnrichedTradeRecord,
    TradeRecord,
    cash_amount,
    to_iso,
)

__all__ = [
    "UNCATEGORIZED",
    "CategoryInfo",
    "EnrichedTradeRecord",
    "TradeRecord",
    "cash_amount",
    "to_iso",
]
