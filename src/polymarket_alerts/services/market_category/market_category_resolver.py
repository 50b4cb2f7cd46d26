# -*- coding: utf-8 -*-
"""MarketCategoryResolver: condition_id -> market -> event -> tags -> category."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.clients.gamma_api import GammaApiClient
from polymarket_alerts.exceptions import PolymarketAPIError
from polymarket_alerts.models.trade import UNCATEGORIZED, CategoryInfo
from polymarket_alerts.persistence.cache import InflightRegistry, TieredCache
from polymarket_alerts.services.market_category.classification import (
    classify,
    normalize_tag_slugs,
)
from polymarket_alerts.utils.validation import unique_lower
from polymarket_alerts.utils.worker_pool import run_bounded

if TYPE_CHECKING:
    from polymarket_alerts.config import Settings

EventTags = tuple[str, ...]


class MarketCategoryResolver:
    """Classifies markets by the tags of the event they belong to.

    Market ids are processed in chunks (one batched Gamma /markets request per
    chunk for the ids whose market -> event link is not cached). Tags are cached
    per event, since several markets share one event, and fetched by a small
    paced worker pool. Never raises: anything that fails yields "Other".
    """

    def __init__(
        self,
        gamma_client: GammaApiClient,
        tag_cache: TieredCache[EventTags],
        market_event_cache: TieredCache[Optional[str]],
        settings: Settings,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            gamma_client: Gamma API client (injected).
            tag_cache: event_id -> tag slugs cache (flat TTL).
            market_event_cache: condition_id -> event_id (None: market has no event).
            settings: Application settings (uses settings.categories).
            sleep: Pacing sleep (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._gamma = gamma_client
        self._tag_cache = tag_cache
        self._market_event_cache = market_event_cache
        self._settings = settings
        self._sleep = sleep
        self._inflight: InflightRegistry[str, EventTags] = InflightRegistry()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def resolve_categories(self, market_ids: Iterable[str]) -> dict[str, CategoryInfo]:
        """Resolve every market id (lower-cased) to its CategoryInfo.

        Every distinct input id gets an entry; unresolvable ones are
        Other/Other/().
        """
        uniq = unique_lower(market_ids)
        chunk_size = max(1, self._settings.categories.chunk_size)
        out: dict[str, CategoryInfo] = {}
        for i in range(0, len(uniq), chunk_size):
            chunk = uniq[i : i + chunk_size]
            with bound_contextvars(
                category_chunk_index=i // chunk_size,
                category_chunk_size=len(chunk),
            ):
                out.update(await self._resolve_chunk(chunk))

        self._logger.debug(
            "market_categories_resolved",
            category_markets_count=len(uniq),
            category_uncategorized_count=sum(1 for c in out.values() if not c.tag_slugs),
        )
        return out

    async def cached_categories(self, market_ids: Iterable[str]) -> dict[str, CategoryInfo]:
        """Categories from fresh cache entries only (no network); Other for the rest."""
        out: dict[str, CategoryInfo] = {}
        for cid in unique_lower(market_ids):
            link = await self._market_event_cache.get(cid)
            if not link.is_fresh or not link.value:
                out[cid] = UNCATEGORIZED
                continue
            tags = await self._tag_cache.get(link.value)
            out[cid] = classify(tags.value) if tags.is_fresh and tags.value is not None else UNCATEGORIZED
        return out

    async def _resolve_chunk(self, chunk: list[str]) -> dict[str, CategoryInfo]:
        market_to_event = await self._market_events(chunk)

        event_ids = list(dict.fromkeys(market_to_event.values()))
        tags_by_event: dict[str, EventTags] = {}

        async def _load(event_id: str) -> None:
            tags_by_event[event_id] = await self._event_tag_slugs(event_id)

        await run_bounded(
            event_ids,
            _load,
            concurrency=self._settings.categories.concurrency,
            pacing_seconds=self._settings.categories.pacing_seconds,
            sleep=self._sleep,
        )

        out: dict[str, CategoryInfo] = {}
        for cid in chunk:
            event_id = market_to_event.get(cid)
            tags = tags_by_event.get(event_id, ()) if event_id else ()
            out[cid] = classify(tags)
        return out

    async def _market_events(self, chunk: list[str]) -> dict[str, str]:
        """condition_id -> event_id for the chunk; cached links first, one request for the rest."""
        market_to_event: dict[str, str] = {}
        missing: list[str] = []
        for cid in chunk:
            link = await self._market_event_cache.get(cid)
            if link.is_fresh:
                if link.value:
                    market_to_event[cid] = link.value
            else:
                missing.append(cid)
        if not missing:
            return market_to_event

        try:
            markets = await self._gamma.get_markets_by_condition_ids(missing)
        except Exception as e:
            # Not cached: the next run retries the whole batch
            self._logger.warning(
                "gamma_api_batch_failed",
                category_missing_count=len(missing),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return market_to_event

        fetched: dict[str, str] = {}
        for m in markets:
            cid = str(m.get("conditionId") or m.get("condition_id") or "").strip().lower()
            if not cid:
                continue
            event_id = GammaApiClient.event_id_of(m)
            if event_id is not None:
                fetched[cid] = event_id

        for cid in missing:
            event_id = fetched.get(cid)
            await self._market_event_cache.put(cid, event_id)
            if event_id is not None:
                market_to_event[cid] = event_id
        return market_to_event

    async def _event_tag_slugs(self, event_id: str) -> EventTags:
        cached = await self._tag_cache.get(event_id)
        if cached.is_fresh and cached.value is not None:
            return cached.value
        return await self._inflight.run(event_id, partial(self._fetch_event_tag_slugs, event_id))

    async def _fetch_event_tag_slugs(self, event_id: str) -> EventTags:
        try:
            tags = await self._gamma.get_event_tags(event_id)
        except PolymarketAPIError as e:
            self._logger.warning(
                "gamma_api_event_tags_failed",
                gamma_api_event_id=event_id,
                http_status_code=e.status_code,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            # An HTTP error answer is cached as "no tags"; a transport failure is not
            if e.status_code is not None:
                await self._tag_cache.put(event_id, ())
            return ()
        except Exception as e:
            self._logger.warning(
                "gamma_api_event_tags_failed",
                gamma_api_event_id=event_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ()

        slugs = normalize_tag_slugs(t.get("slug") for t in tags)
        await self._tag_cache.put(event_id, slugs)
        return slugs
