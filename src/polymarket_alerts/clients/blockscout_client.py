# -*- coding: utf-8 -*-
"""Blockscout explorer client: contract creation transaction of an address."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_alerts.config import Settings
from polymarket_alerts.utils.validation import as_tx_hash, mask_address

if TYPE_CHECKING:
    from .http import AsyncHttpClient

# Field spellings seen across Blockscout versions
_V2_TX_FIELDS = (
    "creation_transaction_hash",
    "creationTransactionHash",
    "creation_tx_hash",
    "creationTxHash",
)
_LEGACY_TX_FIELDS = ("txHash", "txhash", "transactionHash")


class BlockscoutClient:
    """Looks up the creation tx hash of a (proxy) wallet contract.

    Two providers with the same contract: the v2 REST API (primary) and the
    Etherscan-compatible legacy API, module=contract&action=getcontractcreation
    (fallback). Both return None when the explorer has no answer.
    """

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
            settings: Application settings (uses settings.api.blockscout_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.blockscout_host.rstrip("/")

    async def get_creation_tx_hash(self, address: str) -> Optional[str]:
        """Creation tx hash from GET /api/v2/addresses/{address}, or None.

        Raises:
            PolymarketAPIError: If the request fails after retries (404 is None).
        """
        with bound_contextvars(blockscout_address_masked=mask_address(address), blockscout_api="v2"):
            data = await self._http.get(
                f"{self._base_url()}/api/v2/addresses/{address}",
                not_found_ok=True,
            )
            if not isinstance(data, dict):
                return None
            body = cast(Dict[str, Any], data)
            for name in _V2_TX_FIELDS:
                tx = as_tx_hash(body.get(name))
                if tx:
                    return tx
            self._logger.debug("blockscout_v2_no_creation_tx")
            return None

    async def get_creation_tx_hash_legacy(self, address: str) -> Optional[str]:
        """Creation tx hash from the legacy getcontractcreation action, or None.

        Raises:
            PolymarketAPIError: If the request fails after retries (404 is None).
        """
        params = {
            "module": "contract",
            "action": "getcontractcreation",
            "contractaddresses": address,
        }
        with bound_contextvars(blockscout_address_masked=mask_address(address), blockscout_api="legacy"):
            data = await self._http.get(f"{self._base_url()}/api", params=params, not_found_ok=True)
            if not isinstance(data, dict):
                return None
            result = cast(Dict[str, Any], data).get("result")
            if not isinstance(result, list) or not result:
                return None
            first = cast(List[Any], result)[0]
            if not isinstance(first, dict):
                return None
            item = cast(Dict[str, Any], first)
            for name in _LEGACY_TX_FIELDS:
                tx = as_tx_hash(item.get(name))
                if tx:
                    return tx
            return None
