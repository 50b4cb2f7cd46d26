# -*- coding: utf-8 -*-
"""Unit tests for run_bounded."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from polymarket_alerts.utils.worker_pool import run_bounded


async def test_run_bounded_handles_every_item_once(sleep: Any) -> None:
    seen: list[int] = []

    async def handler(item: int) -> None:
        await asyncio.sleep(0)
        seen.append(item)

    await run_bounded(range(10), handler, concurrency=3, sleep=sleep)

    assert sorted(seen) == list(range(10))


async def test_run_bounded_never_exceeds_concurrency(sleep: Any) -> None:
    in_flight = 0
    peak = 0

    async def handler(_item: int) -> None:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1

    await run_bounded(range(12), handler, concurrency=2, pacing_seconds=0.25, sleep=sleep)

    assert peak == 2


async def test_run_bounded_sleeps_after_each_item(sleep: Any) -> None:
    async def handler(_item: str) -> None:
        return None

    await run_bounded(["a", "b", "c"], handler, concurrency=2, pacing_seconds=0.08, sleep=sleep)

    assert sleep.calls == [0.08, 0.08, 0.08]


async def test_run_bounded_skips_pacing_when_zero(sleep: Any) -> None:
    async def handler(_item: str) -> None:
        return None

    await run_bounded(["a", "b"], handler, concurrency=1, sleep=sleep)

    assert sleep.calls == []


async def test_run_bounded_empty_input_is_noop(sleep: Any) -> None:
    called = False

    async def handler(_item: Any) -> None:
        nonlocal called
        called = True

    await run_bounded([], handler, concurrency=4, sleep=sleep)

    assert called is False


async def test_run_bounded_propagates_handler_error(sleep: Any) -> None:
    async def handler(item: int) -> None:
        if item == 1:
            raise RuntimeError("boom")
        await asyncio.sleep(0)

    with pytest.raises(RuntimeError, match="boom"):
        await run_bounded(range(5), handler, concurrency=2, sleep=sleep)
