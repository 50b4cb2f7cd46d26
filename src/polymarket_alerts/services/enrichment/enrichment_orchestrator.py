# -*- coding: utf-8 -*-
"""EnrichmentOrchestrator: dedupe trades, resolve wallet births and categories, join."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from polymarket_alerts.models.trade import UNCATEGORIZED, EnrichedTradeRecord, TradeRecord
from polymarket_alerts.utils.dedupe import dedupe_trades

if TYPE_CHECKING:
    from polymarket_alerts.config import Settings
    from polymarket_alerts.services.market_category import MarketCategoryResolver
    from polymarket_alerts.services.wallet_birth import WalletBirthResolver


class EnrichmentOrchestrator:
    """Runs both resolvers concurrently over a deduplicated batch and joins the results.

    The two resolvers share nothing but their caches, so their completion
    order does not matter. Output order is the deduplicated input order.
    """

    def __init__(
        self,
        wallet_birth_resolver: WalletBirthResolver,
        market_category_resolver: MarketCategoryResolver,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._births = wallet_birth_resolver
        self._categories = market_category_resolver
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def enrich(
        self,
        trades: Sequence[TradeRecord],
        *,
        deadline_seconds: Optional[float] = None,
    ) -> list[EnrichedTradeRecord]:
        """Deduplicate and enrich trades.

        When a resolver has not finished within the deadline it is cancelled
        and its fields are filled from whatever its cache already holds.

        Args:
            trades: Raw trades in feed order.
            deadline_seconds: Overall time limit; defaults to settings.alerts.deadline_seconds.

        Returns:
            One EnrichedTradeRecord per unique trade, in first-seen order.
        """
        unique = dedupe_trades(trades)
        if not unique:
            return []

        deadline = (
            self._settings.alerts.deadline_seconds if deadline_seconds is None else deadline_seconds
        )
        addresses = [t.proxy_wallet for t in unique]
        market_ids = [t.condition_id for t in unique]

        births_task = asyncio.create_task(
            self._births.resolve_births(addresses, self._settings.wallet_birth.max_addresses)
        )
        categories_task = asyncio.create_task(self._categories.resolve_categories(market_ids))
        tasks = {births_task, categories_task}
        try:
            _, pending = await asyncio.wait(tasks, timeout=deadline)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self._logger.warning(
                "enrichment_deadline_exceeded",
                enrichment_deadline_seconds=deadline,
                enrichment_births_timed_out=births_task in pending,
                enrichment_categories_timed_out=categories_task in pending,
            )

        if self._completed(births_task):
            births = births_task.result().births
        else:
            births = await self._births.cached_births(addresses)
        if self._completed(categories_task):
            categories = categories_task.result()
        else:
            categories = await self._categories.cached_categories(market_ids)

        enriched = [
            EnrichedTradeRecord.from_trade(t, i).with_enrichment(
                births.get(t.proxy_wallet.strip().lower()),
                categories.get(t.condition_id.strip().lower(), UNCATEGORIZED),
            )
            for i, t in enumerate(unique)
        ]
        self._logger.debug(
            "enrichment_completed",
            enrichment_input_count=len(trades),
            enrichment_unique_count=len(unique),
            enrichment_partial=bool(pending),
        )
        return enriched

    def _completed(self, task: asyncio.Task[Any]) -> bool:
        if not task.done() or task.cancelled():
            return False
        exc = task.exception()
        if exc is not None:
            self._logger.error(
                "enrichment_resolver_failed",
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            return False
        return True
