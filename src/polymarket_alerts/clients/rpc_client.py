"""Polygon RPC client for on-chain reads (transactions, blocks)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import structlog

from polymarket_alerts.exceptions import RpcError
from polymarket_alerts.models.trade import to_iso

if TYPE_CHECKING:
    from polymarket_alerts.clients.http import AsyncHttpClient
    from polymarket_alerts.config import Settings


def _hex_to_int(value: Any) -> int | None:
    """Parse a 0x quantity; None for anything else."""
    if not isinstance(value, str) or not value.startswith("0x"):
        return None
    try:
        return int(value, 16)
    except ValueError:
        return None


class RpcClient:
    """Client for Polygon JSON-RPC. Resolves a transaction hash to its block time."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the RPC client.

        Args:
            http_client: HTTP client for POST requests (JSON-RPC).
            settings: Configuration (uses settings.api.polygon_rpc_url).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _rpc_url(self) -> str:
        return self._settings.api.polygon_rpc_url.rstrip("/")

    async def call(self, method: str, params: list[Any]) -> Any:
        """Perform a JSON-RPC call and return its `result` (may be None).

        Raises:
            PolymarketAPIError: If the HTTP request fails.
            RpcError: If the response is not an object or carries an error.
        """
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        response = await self._http.post(self._rpc_url(), json=payload)
        if not isinstance(response, dict):
            raise RpcError(f"Unexpected RPC response type: {type(response).__name__}", method=method)
        resp_dict = cast(dict[str, Any], response)
        if "error" in resp_dict and resp_dict["error"] is not None:
            err = resp_dict["error"]
            code: int | None = None
            if isinstance(err, dict):
                err_d = cast(dict[str, Any], err)
                msg = str(err_d.get("message", err_d))
                raw_code = err_d.get("code")
                code = raw_code if isinstance(raw_code, int) else None
            else:
                msg = str(err)
            raise RpcError(f"RPC error: {msg}", method=method, code=code)
        return resp_dict.get("result")

    async def get_transaction_block_number(self, tx_hash: str) -> str | None:
        """eth_getTransactionByHash -> blockNumber (hex); None if unknown or pending."""
        tx = await self.call("eth_getTransactionByHash", [tx_hash])
        if not isinstance(tx, dict):
            return None
        block_number = cast(dict[str, Any], tx).get("blockNumber")
        return block_number if _hex_to_int(block_number) is not None else None

    async def get_block_timestamp(self, block_number: str) -> int | None:
        """eth_getBlockByNumber(block, false) -> timestamp in unix seconds."""
        block = await self.call("eth_getBlockByNumber", [block_number, False])
        if not isinstance(block, dict):
            return None
        return _hex_to_int(cast(dict[str, Any], block).get("timestamp"))

    async def get_transaction_time_iso(self, tx_hash: str) -> str | None:
        """Block time of a transaction as ISO-8601 UTC (ms precision), or None.

        Raises:
            PolymarketAPIError: If an HTTP request fails.
            RpcError: If the node returns an error.
        """
        block_number = await self.get_transaction_block_number(tx_hash)
        if block_number is None:
            return None
        ts = await self.get_block_timestamp(block_number)
        if ts is None:
            return None
        self._logger.debug("rpc_transaction_time", rpc_block_number=block_number, rpc_block_timestamp=ts)
        return to_iso(ts)
