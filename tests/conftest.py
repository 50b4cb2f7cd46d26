# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from polymarket_alerts.models.trade import TradeRecord
from polymarket_alerts.persistence.cache import TieredCache, TtlPolicy
from polymarket_alerts.persistence.stores.in_memory import InMemorySnapshotStore


class FakeClock:
    """Epoch-milliseconds clock that only moves when told to."""

    def __init__(self, now_ms: int = 1_760_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


class RecordingSleep:
    """Pacing sleep replacement: records requested delays and only yields to the loop."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def wallet() -> str:
    """Default proxy wallet used by tests."""
    return "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"


@pytest.fixture
def condition_id() -> str:
    """Default condition id used by tests."""
    return "0x" + "ab" * 32


@pytest.fixture
def settings() -> Any:
    """Minimal settings object with fast pacing for resolver/orchestrator tests."""
    return SimpleNamespace(
        api=SimpleNamespace(
            data_api_host="https://data-api.test",
            gamma_host="https://gamma.test/",
            blockscout_host="https://blockscout.test",
            polygon_rpc_url="https://rpc.test",
            timeout_seconds=5.0,
            max_retries=2,
        ),
        wallet_birth=SimpleNamespace(
            positive_ttl_seconds=24 * 60 * 60,
            negative_ttl_seconds=60 * 60,
            concurrency=2,
            pacing_seconds=0.25,
            retry_limit=30,
            retry_pacing_seconds=0.3,
            max_addresses=100,
        ),
        categories=SimpleNamespace(
            chunk_size=30,
            tag_ttl_seconds=6 * 60 * 60,
            market_event_negative_ttl_seconds=10 * 60,
            concurrency=4,
            pacing_seconds=0.08,
        ),
        alerts=SimpleNamespace(
            min_cash_usd=10_000.0,
            limit=30,
            deadline_seconds=20.0,
        ),
    )


@pytest.fixture
def birth_store() -> InMemorySnapshotStore[Optional[str]]:
    return InMemorySnapshotStore()


@pytest.fixture
def birth_cache(
    clock: FakeClock,
    birth_store: InMemorySnapshotStore[Optional[str]],
) -> TieredCache[Optional[str]]:
    """Wallet-birth cache (24h / 1h) on an in-memory store and the fake clock."""
    return TieredCache(
        "wallet_birth",
        TtlPolicy(positive_seconds=24 * 60 * 60, negative_seconds=60 * 60),
        store=birth_store,
        flush_delay_seconds=0.01,
        max_persisted_entries=5000,
        clock=clock,
    )


@pytest.fixture
def tag_cache(clock: FakeClock) -> TieredCache[tuple[str, ...]]:
    return TieredCache("event_tags", TtlPolicy.flat(6 * 60 * 60), clock=clock)


@pytest.fixture
def market_event_cache(clock: FakeClock) -> TieredCache[Optional[str]]:
    return TieredCache(
        "market_events",
        TtlPolicy(positive_seconds=6 * 60 * 60, negative_seconds=10 * 60),
        clock=clock,
    )


@pytest.fixture
def trade_factory(wallet: str, condition_id: str) -> Callable[..., TradeRecord]:
    """Build TradeRecord with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> TradeRecord:
        return TradeRecord(
            proxy_wallet=overrides.pop("proxy_wallet", wallet),
            condition_id=overrides.pop("condition_id", condition_id),
            side=overrides.pop("side", "BUY"),
            size=overrides.pop("size", 20_000.0),
            price=overrides.pop("price", 0.55),
            timestamp=overrides.pop("timestamp", 1_760_000_000),
            transaction_hash=overrides.pop("transaction_hash", None),
            title=overrides.pop("title", "Will it rain?"),
            outcome=overrides.pop("outcome", "Yes"),
        )

    return _build
