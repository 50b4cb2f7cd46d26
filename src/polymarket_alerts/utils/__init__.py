# -*- coding: utf-8 -*-
"""Utility modules."""

from polymarket_alerts.utils.dedupe import dedupe_trades, trade_key
from polymarket_alerts.utils.validation import (
    as_tx_hash,
    mask_address,
    unique_lower,
)
from polymarket_alerts.utils.worker_pool import run_bounded

__all__ = [
    "as_tx_hash",
    "dedupe_trades",
    "mask_address",
    "run_bounded",
    "trade_key",
    "unique_lower",
]
