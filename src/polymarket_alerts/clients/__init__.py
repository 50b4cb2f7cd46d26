"""HTTP and API clients."""

from polymarket_alerts.clients.blockscout_client import BlockscoutClient
from polymarket_alerts.clients.data_api import DataApiClient
from polymarket_alerts.clients.gamma_api import GammaApiClient
from polymarket_alerts.clients.http import AsyncHttpClient
from polymarket_alerts.clients.rpc_client import RpcClient

__all__ = [
    "AsyncHttpClient",
    "BlockscoutClient",
    "DataApiClient",
    "GammaApiClient",
    "RpcClient",
]
