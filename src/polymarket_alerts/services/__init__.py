# -*- coding: utf-8 -*-
"""Application services."""

from polymarket_alerts.services.alerts import AlertFeedService
from polymarket_alerts.services.enrichment import EnrichmentOrchestrator
from polymarket_alerts.services.market_category import MarketCategoryResolver
from polymarket_alerts.services.wallet_birth import BirthResolution, WalletBirthResolver

__all__ = [
    "AlertFeedService",
    "BirthResolution",
    "EnrichmentOrchestrator",
    "MarketCategoryResolver",
    "WalletBirthResolver",
]
