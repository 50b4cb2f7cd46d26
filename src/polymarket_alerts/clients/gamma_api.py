# -*- coding: utf-8 -*-
"""Polymarket Gamma API client (markets by condition_id, event tags)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.config import Settings

if TYPE_CHECKING:
    from .http import AsyncHttpClient

# Gamma rejects larger page sizes on /markets
_MAX_MARKETS_LIMIT = 100


class GammaApiClient:
    """Client for Polymarket Gamma API (/markets by condition_ids, /events/{id}/tags)."""

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
            settings: Application settings (uses settings.api.gamma_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.gamma_host.rstrip("/")

    async def get_markets_by_condition_ids(
        self,
        condition_ids: List[str],
    ) -> List[Dict[str, Any]]:
        """Fetch market records for one batch of condition ids (one request).

        condition_ids is sent as a repeated query parameter
        (condition_ids=a&condition_ids=b). Callers keep batches small enough
        for the URL (see CategorySettings.chunk_size).

        Args:
            condition_ids: 0x condition IDs.

        Returns:
            Raw market dicts; non-dict items are dropped.

        Raises:
            PolymarketAPIError: If the request fails after retries.
        """
        if not condition_ids:
            return []
        params: List[tuple[str, Any]] = [("condition_ids", cid) for cid in condition_ids]
        params.append(("limit", min(_MAX_MARKETS_LIMIT, len(condition_ids))))
        params.append(("offset", 0))
        with bound_contextvars(gamma_api_condition_ids_count=len(condition_ids)):
            data = await self._http.get(f"{self._base_url()}/markets", params=params)
            markets = self.__as_list_of_dicts(data)
            if not isinstance(data, list):
                self._logger.warning(
                    "gamma_api_markets_non_list",
                    gamma_api_response_type=type(data).__name__,
                )
            self._logger.debug("gamma_api_markets", gamma_api_markets_count=len(markets))
            return markets

    async def get_event_tags(self, event_id: str) -> List[Dict[str, Any]]:
        """Fetch the tags of an event (GET /events/{id}/tags).

        Returns:
            Raw tag dicts (id, label, slug); [] if the payload is not a list.

        Raises:
            PolymarketAPIError: If the request fails after retries.
        """
        url = f"{self._base_url()}/events/{event_id}/tags"
        with bound_contextvars(gamma_api_event_id=event_id):
            data = await self._http.get(url)
            if not isinstance(data, list):
                self._logger.warning(
                    "gamma_api_event_tags_non_list",
                    gamma_api_response_type=type(data).__name__,
                )
            return self.__as_list_of_dicts(data)

    @staticmethod
    def event_id_of(market: Dict[str, Any]) -> Optional[str]:
        """Event id of a market record: events[0].id, else eventId; None if neither is set."""
        events = market.get("events")
        if isinstance(events, list) and events and isinstance(events[0], dict):
            ev = cast(Dict[str, Any], events[0]).get("id")
            if ev is not None and ev != "":
                return str(ev)
        ev = market.get("eventId")
        if ev is not None and ev != "":
            return str(ev)
        return None

    @staticmethod
    def __as_list_of_dicts(x: Any) -> List[Dict[str, Any]]:
        if not isinstance(x, list):
            return []
        result: List[Dict[str, Any]] = []
        for v in cast(List[Any], x):
            if isinstance(v, dict):
                result.append(cast(Dict[str, Any], v))
        return result
