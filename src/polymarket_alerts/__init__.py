"""Polymarket large-trade alerts: trade feed enrichment with wallet age and market categories."""

from polymarket_alerts.clients import (
    AsyncHttpClient,
    BlockscoutClient,
    DataApiClient,
    GammaApiClient,
    RpcClient,
)
from polymarket_alerts.config import get_settings
from polymarket_alerts.DI import Container
from polymarket_alerts.services import (
    AlertFeedService,
    EnrichmentOrchestrator,
    MarketCategoryResolver,
    WalletBirthResolver,
)

__version__ = "0.1.0"
__all__ = [
    "AlertFeedService",
    "AsyncHttpClient",
    "BlockscoutClient",
    "Container",
    "DataApiClient",
    "EnrichmentOrchestrator",
    "GammaApiClient",
    "MarketCategoryResolver",
    "RpcClient",
    "WalletBirthResolver",
    "get_settings",
]
