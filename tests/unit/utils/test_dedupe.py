# -*- coding: utf-8 -*-
"""Unit tests for dedupe helpers."""

from __future__ import annotations

from collections.abc import Callable

from polymarket_alerts.models.trade import TradeRecord
from polymarket_alerts.utils.dedupe import dedupe_trades, trade_key


def test_trade_key_prefers_transaction_hash(trade_factory: Callable[..., TradeRecord]) -> None:
    trade = trade_factory(transaction_hash="0xabc")
    assert trade_key(trade) == "tx:0xabc"


def test_trade_key_falls_back_to_composite(trade_factory: Callable[..., TradeRecord]) -> None:
    trade = trade_factory(
        proxy_wallet="0xw",
        timestamp=1000,
        side="SELL",
        size=12.0,
        price=0.45,
        condition_id="0xc",
    )
    assert trade_key(trade) == "f:0xw|1000|SELL|12.0|0.45|0xc"


def test_trade_key_treats_empty_transaction_hash_as_missing(
    trade_factory: Callable[..., TradeRecord],
) -> None:
    trade = trade_factory(transaction_hash="")
    assert trade_key(trade).startswith("f:")


def test_dedupe_keeps_first_occurrence_in_order(
    trade_factory: Callable[..., TradeRecord],
) -> None:
    a = trade_factory(transaction_hash="0xA", size=1.0)
    a_again = trade_factory(transaction_hash="0xA", size=999.0)
    b = trade_factory(transaction_hash="0xB")

    result = dedupe_trades([a, a_again, b])

    assert result == [a, b]
    assert result[0].size == 1.0


def test_dedupe_composite_key_distinguishes_side_and_price(
    trade_factory: Callable[..., TradeRecord],
) -> None:
    buy = trade_factory(side="BUY")
    sell = trade_factory(side="SELL")
    other_price = trade_factory(price=0.56)
    duplicate = trade_factory(side="BUY")

    assert dedupe_trades([buy, sell, other_price, duplicate]) == [buy, sell, other_price]


def test_dedupe_output_is_subsequence_with_unique_keys(
    trade_factory: Callable[..., TradeRecord],
) -> None:
    trades = [
        trade_factory(transaction_hash=f"0x{i % 3}", timestamp=i) for i in range(10)
    ]

    result = dedupe_trades(trades)

    keys = [trade_key(t) for t in result]
    assert len(keys) == len(set(keys)) == 3
    assert [t.timestamp for t in result] == [0, 1, 2]


def test_dedupe_empty_input() -> None:
    assert dedupe_trades([]) == []


def test_dedupe_does_not_merge_sideless_row_into_buy() -> None:
    item = {"proxyWallet": "0xw", "conditionId": "0xc", "size": 10, "price": 0.5, "timestamp": 1000}
    buy = TradeRecord.from_response({**item, "side": "BUY"})
    sideless = TradeRecord.from_response(item)

    assert dedupe_trades([buy, sideless]) == [buy, sideless]
    assert trade_key(sideless) == "f:0xw|1000||10.0|0.5|0xc"
