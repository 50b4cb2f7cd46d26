# -*- coding: utf-8 -*-
"""Polymarket Data API client (public trade feed)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Literal, Optional, cast

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.clients.data_api.schema import TradeSchema
from polymarket_alerts.config import Settings

if TYPE_CHECKING:
    from polymarket_alerts.clients.http import AsyncHttpClient

TradeFilterType = Literal["CASH", "TOKENS"]


class DataApiClient:
    """Client for Polymarket Data API (GET /trades)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.data_api_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.data_api_host.rstrip("/")

    async def get_trades(
        self,
        *,
        limit: int = 30,
        offset: int = 0,
        taker_only: bool = True,
        filter_type: Optional[TradeFilterType] = "CASH",
        filter_amount: Optional[float] = None,
    ) -> List[TradeSchema]:
        """Fetch the latest trades across all markets (most recent first).

        With filter_type="CASH" and filter_amount, only trades whose cash
        amount is at least filter_amount are returned.

        Args:
            limit: Number of trades to fetch.
            offset: Pagination offset.
            taker_only: Only taker-side fills.
            filter_type: CASH or TOKENS; None to disable the size filter.
            filter_amount: Threshold for filter_type.

        Returns:
            List of trade items (Trade schema); [] for a non-list payload.

        Raises:
            PolymarketAPIError: If the request fails after retries.
        """
        # aiohttp/yarl only accept str, int, float in query params (no bool)
        params: Dict[str, Any] = {
            "limit": max(1, limit),
            "offset": max(0, offset),
            "takerOnly": str(taker_only).lower(),
        }
        if filter_type is not None and filter_amount is not None:
            params["filterType"] = filter_type
            params["filterAmount"] = filter_amount

        with bound_contextvars(
            data_api_limit=params["limit"],
            data_api_offset=params["offset"],
            data_api_filter_amount=filter_amount,
        ):
            data = await self._http.get(f"{self._base_url()}/trades", params=params)
            if not isinstance(data, list):
                self._logger.warning(
                    "data_api_get_trades_non_list",
                    data_api_response_type=type(data).__name__,
                )
                return []
            result: List[TradeSchema] = []
            for x in cast(list[Any], data):
                if isinstance(x, dict):
                    result.append(cast(TradeSchema, x))
            self._logger.debug("data_api_get_trades", data_api_trades_count=len(result))
            return result
