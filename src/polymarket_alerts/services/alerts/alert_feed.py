# -*- coding: utf-8 -*-
"""AlertFeedService: large trades from the Data API, enriched."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.models.trade import EnrichedTradeRecord, TradeRecord

if TYPE_CHECKING:
    from polymarket_alerts.clients.data_api import DataApiClient
    from polymarket_alerts.config import Settings
    from polymarket_alerts.persistence.cache import TieredCache
    from polymarket_alerts.services.enrichment import EnrichmentOrchestrator

# Upper bound of trades per request accepted from callers
MAX_ALERTS_LIMIT = 30


class AlertFeedService:
    """Builds the alert list: fetch the latest large trades, then enrich them."""

    def __init__(
        self,
        data_api: DataApiClient,
        orchestrator: EnrichmentOrchestrator,
        birth_cache: TieredCache[Optional[str]],
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the service.

        Args:
            data_api: Data API client (injected).
            orchestrator: Enrichment orchestrator (injected).
            birth_cache: Wallet-birth cache; its snapshot is loaded on first use.
            settings: Application settings (uses settings.alerts).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._data_api = data_api
        self._orchestrator = orchestrator
        self._birth_cache = birth_cache
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_alerts(
        self,
        *,
        min_cash_usd: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> list[EnrichedTradeRecord]:
        """Latest taker trades with cash amount >= min_cash_usd, enriched.

        Raises:
            PolymarketAPIError: If the trade feed itself cannot be fetched.
        """
        alerts_settings = self._settings.alerts
        min_cash = alerts_settings.min_cash_usd if min_cash_usd is None else max(0.0, min_cash_usd)
        n = alerts_settings.limit if limit is None else limit
        n = max(1, min(MAX_ALERTS_LIMIT, n))

        await self._birth_cache.load_from_store()

        with bound_contextvars(alerts_min_cash_usd=min_cash, alerts_limit=n):
            raw = await self._data_api.get_trades(
                limit=n,
                offset=0,
                taker_only=True,
                filter_type="CASH",
                filter_amount=min_cash,
            )
            trades = [TradeRecord.from_response(dict(t)) for t in raw]
            alerts = await self._orchestrator.enrich(trades)
            self._logger.info(
                "alerts_built",
                alerts_trades_count=len(trades),
                alerts_count=len(alerts),
            )
            return alerts
