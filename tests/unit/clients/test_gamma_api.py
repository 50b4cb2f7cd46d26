# -*- coding: utf-8 -*-
"""Unit tests for GammaApiClient."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

from polymarket_alerts.clients.gamma_api import GammaApiClient


async def test_get_markets_sends_repeated_condition_ids(settings: Any) -> None:
    http: Any = SimpleNamespace(get=AsyncMock(return_value=[{"conditionId": "0xa"}, "junk"]))
    client = GammaApiClient(http, settings)

    markets = await client.get_markets_by_condition_ids(["0xa", "0xb"])

    assert markets == [{"conditionId": "0xa"}]
    http.get.assert_awaited_once_with(
        "https://gamma.test/markets",
        params=[("condition_ids", "0xa"), ("condition_ids", "0xb"), ("limit", 2), ("offset", 0)],
    )


async def test_get_markets_caps_limit_at_100(settings: Any) -> None:
    http: Any = SimpleNamespace(get=AsyncMock(return_value=[]))
    client = GammaApiClient(http, settings)

    await client.get_markets_by_condition_ids([f"0x{i}" for i in range(150)])

    params = http.get.await_args.kwargs["params"]
    assert ("limit", 100) in params


async def test_get_markets_empty_input_makes_no_request(settings: Any) -> None:
    http: Any = SimpleNamespace(get=AsyncMock())
    client = GammaApiClient(http, settings)

    assert await client.get_markets_by_condition_ids([]) == []
    http.get.assert_not_awaited()


async def test_get_markets_non_list_payload_is_empty(settings: Any) -> None:
    http: Any = SimpleNamespace(get=AsyncMock(return_value={"error": "bad request"}))
    client = GammaApiClient(http, settings)

    assert await client.get_markets_by_condition_ids(["0xa"]) == []


async def test_get_event_tags(settings: Any) -> None:
    tags = [{"id": "1", "label": "Politics", "slug": "politics"}]
    http: Any = SimpleNamespace(get=AsyncMock(return_value=tags))
    client = GammaApiClient(http, settings)

    assert await client.get_event_tags("903") == tags
    http.get.assert_awaited_once_with("https://gamma.test/events/903/tags")


def test_event_id_of_prefers_first_event() -> None:
    assert GammaApiClient.event_id_of({"events": [{"id": 12}, {"id": 13}], "eventId": "99"}) == "12"


def test_event_id_of_falls_back_to_event_id_field() -> None:
    assert GammaApiClient.event_id_of({"events": [], "eventId": 99}) == "99"
    assert GammaApiClient.event_id_of({"events": [{"id": ""}], "eventId": "5"}) == "5"


def test_event_id_of_none_when_absent() -> None:
    assert GammaApiClient.event_id_of({"conditionId": "0xa"}) is None
